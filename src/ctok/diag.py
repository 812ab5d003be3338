from dataclasses import dataclass


@dataclass(frozen=True)
class Diagnostic:
    stage: str
    filename: str
    message: str
    line: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}: {self.stage}: {self.message}"


class FrontendError(ValueError):
    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic
