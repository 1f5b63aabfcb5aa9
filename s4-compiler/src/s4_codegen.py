import sys

#instruções da máquina de pilha
INSTRUCTIONS = {
    'pc', 'p', 'pwc', 'stav', 'dupe', 'rot',
    'add', 'sub', 'mult', 'div', 'neg',
    'dout', 'sout', 'aout', 'din',
    'jz', 'jnz', 'ja', 'halt'
}


class CodeGenerator:
    def __init__(self, out, symbol_table):
        """
        Inicializa o Gerador de Código.
        :param out: ficheiro de destino (assembly).
        :param symbol_table: A Tabela de Símbolos (TS).
        """
        self.out = out if out is not None else sys.stdout
        self.ts = symbol_table
        self.label_count = 0
        self.strings = [] # (etiqueta, lexema) das strings literais


    #funções auxiliares
    def get_label(self):
        """Gera etiquetas únicas (@L0, @L1...) para saltos e strings."""
        label = f"@L{self.label_count}"
        self.label_count += 1
        return label

    def emit(self, op, operand=None):
        """Escreve uma instrução, com ou sem operando, em colunas alinhadas."""
        if op not in INSTRUCTIONS:
            raise ValueError(f"Instrução desconhecida: {op}")

        if operand is None:
            print(f"          {op:<4}", file=self.out)
        else:
            print(f"          {op:<4}      {operand}", file=self.out)

    def emit_label(self, label):
        """Escreve uma etiqueta (Label)."""
        print(f"{label + ':':<9} ", file=self.out)

    def emit_dw(self, label, value):
        """Escreve uma declaração de dados."""
        print(f"{label + ':':<9} dw        {value}", file=self.out)

    def emit_string(self, label, lexeme):
        """Guarda a string para a zona de dados (o lexema mantém as aspas)."""
        self.strings.append((label, lexeme))


    #fim do programa
    def end_code(self):
        """
        Termina o programa: halt, depois as strings literais
        e uma palavra a 0 por cada variável, pela ordem da TS.
        """
        print(file=self.out)
        self.emit('halt')

        for label, lexeme in self.strings:
            self.emit_dw(label, lexeme)

        for i in range(self.ts.size()):
            self.emit_dw(self.ts.name_at(i), '0')
