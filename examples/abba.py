import logging

from pybacktrack import ParserConfig, run_parser
from pybacktrack.Prim import accept
from pybacktrack.Combinators import chain, choice, parser_traced
from pybacktrack.Recovery import run, with_error

# 1. Grammar pieces over the "A"/"B" alphabet
abba = chain(accept('A'), accept('B'), accept('B'), accept('A')).map("".join)

# 2. A leading "AAB", then an ABBA block, then one more A, B or ABBA
stuff = chain(
    accept('A'),
    accept('A'),
    accept('B'),
    run(parser_traced("abba", abba), with_error("Can't find")),
    choice(accept('A'), accept('B'), abba),
)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(name)s - %(message)s")
    config = ParserConfig(trace=True)

    for text in ["AABABBAABBABABAA", "AABABXA", "AA"]:
        result, err = run_parser(stuff, text, config)
        if err:
            print(f"{text!r} failed:")
            for line in err.messages:
                print(f"  {line}")
        else:
            print(f"{text!r} -> {result}")
