import os
from collections.abc import Mapping
from dataclasses import dataclass

_FALSE_VALUES = {"", "0", "false", "no", "off"}


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    raw = environ.get(name, "").strip().lower()
    return raw not in _FALSE_VALUES


@dataclass(frozen=True)
class ReaderOptions:
    tokenize: bool = True
    unindent: bool = True
    line_numbers: bool = True
    debug: bool = False

    def __post_init__(self) -> None:
        for name in ("tokenize", "unindent", "line_numbers", "debug"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"Option {name} must be a boolean")

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "ReaderOptions":
        env = os.environ if environ is None else environ
        return cls(
            tokenize=not _env_flag(env, "NO_TOKENIZE"),
            unindent=not _env_flag(env, "NO_UNINDENT"),
            line_numbers=not _env_flag(env, "NO_LINENUMS"),
            debug=_env_flag(env, "DEBUG_TOKENIZER"),
        )


def normalize_options(options: ReaderOptions | None) -> ReaderOptions:
    return ReaderOptions() if options is None else options
