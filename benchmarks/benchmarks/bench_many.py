from itertools import chain as concat, repeat as forever

from pybacktrack.Prim import accept, run_parser
from pybacktrack.Combinators import many, choice


class TimeMany:
    def setup(self):
        self.parser = many(accept("a"))
        self.small = "a" * 1000
        self.medium = "a" * 10000
        self.large = "a" * 100000

    def time_many_small(self):
        run_parser(self.parser, self.small)

    def time_many_medium(self):
        run_parser(self.parser, self.medium)

    def time_many_large(self):
        run_parser(self.parser, self.large)


class TimeBacktracking:
    """Every token is read twice: once by the failing branch, once by the winner."""
    def setup(self):
        self.parser = many(choice(accept("b"), accept("a")))
        self.text = "a" * 10000

    def time_choice_replay(self):
        run_parser(self.parser, self.text)

    def time_generator_source(self):
        run_parser(self.parser, (c for c in self.text))


class TimeInfiniteSource:
    def setup(self):
        self.parser = many(accept("a"))

    def time_prefix_of_infinite_stream(self):
        # endless run of "b" after the prefix; many stops at the first one
        source = concat(forever("a", 5000), forever("b"))
        run_parser(self.parser, source)
