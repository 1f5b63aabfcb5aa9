from s4_analex import token_image

# tokens que podem começar um comando
STATEMENT_START = {'ID', 'PRINTLN', 'PRINT', 'READINT', 'SEMICOLON',
                   'LEFTBRACE', 'WHILE', 'IF', 'DO'}

# operadores binários e a instrução correspondente
ADD_OPS = {'PLUS': 'add', 'MINUS': 'sub'}
MUL_OPS = {'TIMES': 'mult', 'DIVIDE': 'div'}


class ParseError(Exception):
    """Erro sintático: token inesperado, com a sua posição e o que se esperava."""

    def __init__(self, token, expected):
        self.token = token
        self.expected = expected
        super().__init__(
            f'Encontrado "{token.lexeme}" na linha {token.begin_line} '
            f'coluna {token.begin_column}\nEsperado {expected}')


class Parser:
    def __init__(self, symbol_table, tokenizer, codegen):
        """
        Analisador sintático descendente recursivo.
        O código é gerado durante o reconhecimento (não há AST).
        - pending guarda os tokens já lidos mas ainda não consumidos
        - pending[0] é o token atual
        """
        self.ts = symbol_table
        self.tm = tokenizer
        self.cg = codegen
        self.pending = []
        self.previous = None

        # preparar o primeiro token
        self.peek(1)

        self.statements = {
            'ID': self.assignment_statement,
            'PRINTLN': self.println_statement,
            'PRINT': self.print_statement,
            'READINT': self.readint_statement,
            'SEMICOLON': self.null_statement,
            'LEFTBRACE': self.compound_statement,
            'WHILE': self.while_statement,
            'IF': self.if_statement,
            'DO': self.do_statement,
        }

    #gestão dos tokens
    def peek(self, k=1):
        """
        peek(0) é o token anterior, peek(1) o atual, peek(2) o seguinte, ...
        Não avança na sequência de tokens.
        """
        if k <= 0:
            return self.previous

        while len(self.pending) < k:
            self.pending.append(self.tm.next_token())
        return self.pending[k - 1]

    @property
    def current(self):
        return self.peek(1)

    def advance(self):
        self.previous = self.peek(1)
        self.pending.pop(0)

    def consume(self, expected):
        """Avança se o token atual for do tipo esperado, senão dá erro."""
        token = self.current
        if token.kind != expected:
            raise self.error(token_image[expected])
        self.advance()
        return token

    def error(self, expected):
        return ParseError(self.current, expected)

    #programa
    def parse(self):
        self.program()

    def program(self):
        self.statement_list()
        self.consume('EOF')
        self.cg.end_code()

    def statement_list(self):
        while self.current.kind in STATEMENT_START:
            self.statement()

        if self.current.kind not in ('RIGHTBRACE', 'EOF'):
            raise self.error('comando, "}" ou <EOF>')

    def statement(self):
        handler = self.statements.get(self.current.kind)
        if handler is None:
            raise self.error('comando')
        handler()

    #atribuição (simples ou em cadeia)
    def assignment_statement(self):
        t = self.consume('ID')
        self.ts.enter(t.lexeme)
        self.cg.emit('pc', t.lexeme)
        self.consume('ASSIGN')
        self.assignment_tail()
        self.cg.emit('stav')

    def assignment_tail(self):
        # a = b = ... : ID seguido de '=' é outro destino, não uma expressão
        if self.peek(1).kind == 'ID' and self.peek(2).kind == 'ASSIGN':
            t = self.consume('ID')
            self.ts.enter(t.lexeme)
            self.cg.emit('pc', t.lexeme)
            self.consume('ASSIGN')
            self.assignment_tail()
            # guardar o valor e deixar uma cópia para o destino anterior
            self.cg.emit('dupe')
            self.cg.emit('rot')
            self.cg.emit('stav')
        else:
            self.expr()
            self.consume('SEMICOLON')

    #escrita e leitura
    def println_statement(self):
        self.consume('PRINTLN')
        self.consume('LEFTPAREN')
        if self.current.kind != 'RIGHTPAREN':
            self.print_arg()
        self.cg.emit('pc', "'\\n'")
        self.cg.emit('aout')
        self.consume('RIGHTPAREN')
        self.consume('SEMICOLON')

    def print_statement(self):
        self.consume('PRINT')
        self.consume('LEFTPAREN')
        self.print_arg()
        self.consume('RIGHTPAREN')
        self.consume('SEMICOLON')

    def print_arg(self):
        if self.current.kind == 'STRING':
            t = self.consume('STRING')
            label = self.cg.get_label()
            self.cg.emit('pc', label)
            self.cg.emit('sout')
            self.cg.emit_string(label, t.lexeme)
        else:
            self.expr()
            self.cg.emit('dout')

    def readint_statement(self):
        self.consume('READINT')
        self.consume('LEFTPAREN')
        t = self.consume('ID')
        self.ts.enter(t.lexeme)
        self.cg.emit('pc', t.lexeme)
        self.cg.emit('din')
        self.cg.emit('stav')
        self.consume('RIGHTPAREN')
        self.consume('SEMICOLON')

    def null_statement(self):
        self.consume('SEMICOLON')

    def compound_statement(self):
        self.consume('LEFTBRACE')
        self.statement_list()
        self.consume('RIGHTBRACE')

    #ciclos e condicionais
    def while_statement(self):
        self.consume('WHILE')
        top = self.cg.get_label()
        self.cg.emit_label(top)
        self.consume('LEFTPAREN')
        self.expr()
        self.consume('RIGHTPAREN')

        end = self.cg.get_label()
        self.cg.emit('jz', end)
        self.statement()
        self.cg.emit('ja', top)
        self.cg.emit_label(end)

    def do_statement(self):
        self.consume('DO')
        top = self.cg.get_label()
        self.cg.emit_label(top)
        self.statement()

        self.consume('WHILE')
        self.consume('LEFTPAREN')
        self.expr()
        self.cg.emit('jnz', top)
        self.consume('RIGHTPAREN')
        self.consume('SEMICOLON')

    def if_statement(self):
        self.consume('IF')
        self.consume('LEFTPAREN')
        self.expr()
        self.consume('RIGHTPAREN')

        false_label = self.cg.get_label()
        self.cg.emit('jz', false_label)
        self.statement()
        self.else_part(false_label)

    def else_part(self, false_label):
        # o else fica sempre associado ao if mais próximo
        if self.current.kind == 'ELSE':
            self.consume('ELSE')
            join_label = self.cg.get_label()
            self.cg.emit('ja', join_label)
            self.cg.emit_label(false_label)
            self.statement()
            self.cg.emit_label(join_label)
        else:
            self.cg.emit_label(false_label)

    #expressões
    def expr(self):
        self.term()
        while self.current.kind in ADD_OPS:
            op = ADD_OPS[self.current.kind]
            self.advance()
            self.term()
            self.cg.emit(op)

    def term(self):
        self.factor()
        while self.current.kind in MUL_OPS:
            op = MUL_OPS[self.current.kind]
            self.advance()
            self.factor()
            self.cg.emit(op)

    def factor(self):
        # sinais prefixos: '+' não faz nada, cada '-' troca a paridade
        negate = False
        while self.current.kind in ('PLUS', 'MINUS'):
            if self.current.kind == 'MINUS':
                negate = not negate
            self.advance()

        kind = self.current.kind
        if kind == 'UNSIGNED':
            t = self.consume('UNSIGNED')
            self.cg.emit('pwc', t.lexeme)
        elif kind == 'ID':
            t = self.consume('ID')
            self.ts.enter(t.lexeme)
            self.cg.emit('p', t.lexeme)
        elif kind == 'LEFTPAREN':
            self.consume('LEFTPAREN')
            self.expr()
            self.consume('RIGHTPAREN')
        else:
            raise self.error('fator')

        if negate:
            self.cg.emit('neg')
