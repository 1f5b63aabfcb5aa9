import io
import sys
from s4_analex import Tokenizer
from s4_anasem import SymbolTable
from s4_codegen import CodeGenerator
from s4_anasin import Parser, ParseError

DEBUG_FLAG = '-debug_token_manager'
HEADER = '; from S4 compiler'
BANNER = 'Compilador S4'


def translate(lines, out, debug=False):
    """
    Compila as linhas do programa S4 para assembly, escrevendo em out.
    Em caso de erro sintático levanta ParseError; o que já foi escrito fica em out.
    Devolve a tabela de símbolos.
    """
    ts = SymbolTable()
    tm = Tokenizer(lines, out, debug)
    cg = CodeGenerator(out, ts)
    parser = Parser(ts, tm, cg)

    parser.parse()
    return ts


def compile_source(text, debug=False):
    """Compila o texto de um programa e devolve o assembly gerado."""
    out = io.StringIO()
    translate(text.splitlines(), out, debug)
    return out.getvalue()


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv

    print(BANNER)

    if len(args) < 1:
        print(f"Uso: s4c [{DEBUG_FLAG}] <ficheiro_base>", file=sys.stderr)
        return 1

    debug = False
    for arg in args[:-1]:
        if arg.lower() == DEBUG_FLAG:
            debug = True
        else:
            print(f"Argumento inválido: {arg}", file=sys.stderr)
            return 1

    # nomes dos ficheiros de entrada (.s) e de saída (.a)
    in_name = args[-1] + '.s'
    out_name = args[-1] + '.a'

    try:
        src = open(in_name, 'r')
    except OSError as e:
        print(f"Erro: não foi possível abrir '{in_name}': {e.strerror}", file=sys.stderr)
        return 1

    with src:
        try:
            out = open(out_name, 'w')
        except OSError as e:
            print(f"Erro: não foi possível escrever '{out_name}': {e.strerror}", file=sys.stderr)
            return 1

        with out:
            print(HEADER, file=out)
            try:
                translate(src, out, debug)
            except ParseError as e:
                # a mensagem fica também no fim do ficheiro parcial
                print(e, file=sys.stderr)
                print(e, file=out)
                return 1

    print(f"{in_name} -> {out_name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
