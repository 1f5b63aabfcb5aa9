import ply.lex as lex
import sys
from collections import namedtuple

#palavras reservadas (o S4 distingue maiúsculas de minúsculas)
reserved_map = {
    'println': 'PRINTLN',
    'print': 'PRINT',
    'readint': 'READINT',
    'while': 'WHILE',
    'if': 'IF',
    'else': 'ELSE',
    'do': 'DO'
}

#tokens
tokens = list(reserved_map.values()) + ['ID', 'UNSIGNED', 'STRING',
    'ASSIGN',
    'SEMICOLON',
    'LEFTPAREN',
    'RIGHTPAREN',
    'PLUS',
    'MINUS',
    'TIMES',
    'DIVIDE',
    'LEFTBRACE',
    'RIGHTBRACE',
    'ERROR'
    ]

#descrição de cada tipo de token, usada nas mensagens de erro
token_image = {
    'EOF': '<EOF>',
    'PRINTLN': '"println"',
    'PRINT': '"print"',
    'READINT': '"readint"',
    'WHILE': '"while"',
    'IF': '"if"',
    'ELSE': '"else"',
    'DO': '"do"',
    'ID': '<ID>',
    'UNSIGNED': '<UNSIGNED>',
    'STRING': '<STRING>',
    'ASSIGN': '"="',
    'SEMICOLON': '";"',
    'LEFTPAREN': '"("',
    'RIGHTPAREN': '")"',
    'PLUS': '"+"',
    'MINUS': '"-"',
    'TIMES': '"*"',
    'DIVIDE': '"/"',
    'LEFTBRACE': '"{"',
    'RIGHTBRACE': '"}"',
    'ERROR': '<ERROR>'
}

#o estado 'string' indica que estamos dentro de uma string literal
states = (
    ('string', 'exclusive'),
)

#simbolos de um só carácter
t_ASSIGN     = r'='
t_SEMICOLON  = r';'
t_LEFTPAREN  = r'\('
t_RIGHTPAREN = r'\)'
t_PLUS       = r'\+'
t_MINUS      = r'-'
t_TIMES      = r'\*'
t_DIVIDE     = r'/'
t_LEFTBRACE  = r'\{'
t_RIGHTBRACE = r'\}'

#comentários de linha // ___ (só fora de strings, o estado 'string' não tem esta regra)
def t_COMMENT(t):
    r'//[^\n]*'
    pass

#inteiros sem sinal (o lexema fica como texto)
def t_UNSIGNED(t):
    r'[0-9]+'
    return t

#identificadores e palavras reservadas
def t_ID(t):
    r'[A-Za-z][A-Za-z0-9]*'
    t.type = reserved_map.get(t.value, 'ID')
    return t

#início de uma string literal
def t_QUOTE(t):
    r'"'
    t.lexer.string_buffer = [t.value]
    t.lexer.string_begin = (t.lexer.lineno, t.lexpos + 1)
    t.lexer.begin('string')

def t_newline(t):
    r'\n+'
    pass

t_ignore = ' \t\r'

#qualquer outro carácter dá um token de erro com esse carácter
def t_error(t):
    t.type = 'ERROR'
    t.value = t.value[0]
    t.lexer.skip(1)
    return t


#barra seguida de fim de linha: a string continua na próxima linha física
def t_string_continuation(t):
    r'\\\n'
    pass

#aspas não escapadas fecham a string
def t_string_end(t):
    r'"'
    t.lexer.string_buffer.append(t.value)
    t.value = ''.join(t.lexer.string_buffer)
    t.type = 'STRING'
    t.begin = t.lexer.string_begin
    t.end = (t.lexer.lineno, t.lexpos + 1)
    t.lexer.begin('INITIAL')
    return t

#fim de linha sem aspas de fecho
def t_string_newline(t):
    r'\n'
    t.value = ''.join(t.lexer.string_buffer)
    t.type = 'ERROR'
    t.begin = t.lexer.string_begin
    t.end = (t.lexer.lineno, t.lexpos)
    t.lexer.begin('INITIAL')
    return t

#conteúdo: '\x' consome sempre o par, por isso '\"' não fecha e '\\"' fecha
def t_string_body(t):
    r'(?:[^"\\\n]|\\.)+'
    t.lexer.string_buffer.append(t.value)

t_string_ignore = ''

def t_string_error(t):
    t.lexer.string_buffer.append(t.value[0])
    t.lexer.skip(1)


lexer = lex.lex()


Token = namedtuple('Token', ['kind', 'lexeme', 'begin_line', 'begin_column', 'end_line', 'end_column'])


class Tokenizer:
    def __init__(self, source, out=None, debug=False):
        """
        Analisador léxico do S4.
        :param source: iterável de linhas físicas do programa fonte.
        :param out: ficheiro de destino, onde cada linha lida é ecoada como comentário.
        :param debug: escreve também um registo de cada token produzido.
        """
        self.lines = iter(source)
        self.out = out
        self.debug = debug

        self.lexer = lexer.clone()
        self.lexer.begin('INITIAL')
        self.lexer.lineno = 0
        self.lexer.input('')

    def next_token(self):
        """Devolve o próximo token; no fim do ficheiro devolve sempre EOF."""
        while True:
            tok = self.lexer.token()
            if tok is not None:
                token = self._make_token(tok)
                break
            if not self._read_line():
                token = self._end_of_input()
                break

        # registo do token como comentário no ficheiro de destino
        if self.debug and self.out is not None:
            print("; kd=%-10s bL=%3d bC=%3d eL=%3d eC=%3d im=%s" % (
                token.kind, token.begin_line, token.begin_column,
                token.end_line, token.end_column, token.lexeme), file=self.out)

        return token

    def _read_line(self):
        """Lê a próxima linha física e ecoa-a no destino. Devolve False no fim."""
        line = next(self.lines, None)
        if line is None:
            return False

        line = line.rstrip('\r\n')
        if self.out is not None:
            print(f"; {line}", file=self.out)

        self.lexer.lineno += 1
        self.lexer.input(line + '\n')
        return True

    def _make_token(self, tok):
        line = self.lexer.lineno
        begin = getattr(tok, 'begin', (line, tok.lexpos + 1))
        end = getattr(tok, 'end', (line, tok.lexpos + len(tok.value)))
        return Token(tok.type, tok.value, begin[0], begin[1], end[0], end[1])

    def _end_of_input(self):
        line = self.lexer.lineno
        column = len(self.lexer.lexdata)

        # string com continuação na última linha do ficheiro
        if self.lexer.current_state() == 'string':
            self.lexer.begin('INITIAL')
            begin_line, begin_column = self.lexer.string_begin
            return Token('ERROR', ''.join(self.lexer.string_buffer),
                         begin_line, begin_column, line, column - 1)

        # ficheiro vazio: nenhuma linha foi lida
        if line == 0:
            return Token('EOF', '<EOF>', 1, 1, 1, 1)

        return Token('EOF', '<EOF>', line, column, line, column)


if __name__ == "__main__":

    tm = Tokenizer(sys.stdin)

    print("{:<15} {:<20} {:<10} {:<10}".format("TIPO DO TOKEN", "VALOR (LEXEMA)", "LINHA", "COLUNA"))
    print("-" * 55)

    while True:
        tok = tm.next_token()
        if tok.kind == 'EOF':
            break
        print("{:<15} {:<20} {:<10} {:<10}".format(tok.kind, tok.lexeme, tok.begin_line, tok.begin_column))


#para testar
# cat tests/programs/fatorial.s | python3 src/s4_analex.py
