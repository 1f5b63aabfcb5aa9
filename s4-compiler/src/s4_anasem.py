class SymbolTable:
    def __init__(self):
        """
        Inicializa a tabela de símbolos.
        - o S4 só tem um scope global e não tem declarações
        - symbols guarda os nomes pela ordem da primeira ocorrência
        - index dá a posição de cada nome em symbols
        """
        self.symbols = []
        self.index = {}

    def enter(self, name):
        """
        regista o nome se ainda não existir (comparação por igualdade).
        cada nome corresponde a uma palavra de memória iniciada a 0.
        """
        if name not in self.index:
            self.index[name] = len(self.symbols)
            self.symbols.append(name)

    def size(self):
        return len(self.symbols)

    def name_at(self, index):
        return self.symbols[index]

    def __len__(self):
        return len(self.symbols)

    def __iter__(self):
        return iter(self.symbols)

    def __contains__(self, name):
        return name in self.index
