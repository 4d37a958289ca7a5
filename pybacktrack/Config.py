from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class ParserConfig:
    """Message formats and tracing switches shared by every parser in a run."""
    show_token: Callable[[Any], str] = str
    end_of_input_message: str = "Expected token, but reached end of input"
    mismatch_format: str = "Found {token}"
    expected_format: str = "Expected {token}"
    expected_end_message: str = "Expected end of input"
    trace: bool = False

    def mismatch(self, token: Any) -> str:
        return self.mismatch_format.format(token=self.show_token(token))

    def expected(self, token: Any) -> str:
        return self.expected_format.format(token=self.show_token(token))


default_config = ParserConfig()
