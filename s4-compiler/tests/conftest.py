import ast
import io

import pytest

from s4_analex import Tokenizer
from s4_main import compile_source


def tokenize(text):
    """Lista de tokens até EOF (inclusive)."""
    tm = Tokenizer(text.splitlines())
    result = []
    while True:
        tok = tm.next_token()
        result.append(tok)
        if tok.kind == 'EOF':
            return result


def code_of(asm):
    """Instruções e etiquetas do assembly, sem comentários nem dados."""
    code = []
    for line in asm.splitlines():
        if not line.strip() or line.startswith(';'):
            continue
        if line[0].isspace():
            code.append(' '.join(line.split()))
        elif line.rstrip().endswith(':'):
            code.append(line.strip())
    return code


def data_of(asm):
    """Declarações dw, como pares (nome, valor)."""
    data = []
    for line in asm.splitlines():
        if line.startswith(';') or line[:1].isspace() or ' dw ' not in line:
            continue
        label, value = line.split(' dw ', 1)
        data.append((label.strip().rstrip(':'), value.strip()))
    return data


class StackMachine:
    """Interpretador mínimo do assembly gerado, só para os testes."""

    def __init__(self, asm, inputs=()):
        self.code = []
        self.labels = {}
        self.memory = {}
        self.inputs = list(inputs)
        self.output = io.StringIO()

        for line in asm.splitlines():
            if not line.strip() or line.startswith(';'):
                continue
            if line[0].isspace():
                self.code.append(line.split(None, 1))
                continue
            label, rest = line.split(':', 1)
            rest = rest.strip()
            if rest.startswith('dw'):
                value = rest[2:].strip()
                self.memory[label] = value if value.startswith('"') else int(value)
            else:
                self.labels[label] = len(self.code)

    def operand_value(self, operand):
        if operand.startswith("'"):
            return ord(ast.literal_eval(operand))
        return operand

    def run(self, max_steps=100000):
        stack = []
        pc = 0
        for _ in range(max_steps):
            parts = self.code[pc]
            op = parts[0]
            arg = parts[1].strip() if len(parts) > 1 else None
            pc += 1

            if op == 'pc':
                stack.append(self.operand_value(arg))
            elif op == 'p':
                stack.append(self.memory[arg])
            elif op == 'pwc':
                stack.append(int(arg))
            elif op == 'stav':
                value = stack.pop()
                self.memory[stack.pop()] = value
            elif op == 'dupe':
                stack.append(stack[-1])
            elif op == 'rot':
                x, y, z = stack[-3:]
                stack[-3:] = [z, x, y]
            elif op in ('add', 'sub', 'mult', 'div'):
                right = stack.pop()
                left = stack.pop()
                if op == 'add':
                    stack.append(left + right)
                elif op == 'sub':
                    stack.append(left - right)
                elif op == 'mult':
                    stack.append(left * right)
                else:
                    q = abs(left) // abs(right)
                    stack.append(q if (left < 0) == (right < 0) else -q)
            elif op == 'neg':
                stack.append(-stack.pop())
            elif op == 'dout':
                self.output.write(str(stack.pop()))
            elif op == 'sout':
                text = self.memory[stack.pop()][1:-1]
                self.output.write(text.replace('\\"', '"'))
            elif op == 'aout':
                self.output.write(chr(stack.pop()))
            elif op == 'din':
                stack.append(self.inputs.pop(0))
            elif op == 'jz':
                if stack.pop() == 0:
                    pc = self.labels[arg]
            elif op == 'jnz':
                if stack.pop() != 0:
                    pc = self.labels[arg]
            elif op == 'ja':
                pc = self.labels[arg]
            elif op == 'halt':
                return self
            else:
                raise ValueError(op)
        raise RuntimeError("demasiados passos")


@pytest.fixture
def run():
    """Compila e executa um programa; devolve a máquina no fim."""
    def _run(text, inputs=()):
        return StackMachine(compile_source(text), inputs).run()
    return _run
