# errors.py
from typing import List, Optional


class PageObjectError(Exception):
    """Base class for every error raised by the generator."""


class ConfigurationError(PageObjectError, ValueError):
    """The caller configuration was rejected before touching the page."""

    def __init__(self, messages: List[str]):
        self.messages = list(messages)
        super().__init__(f"Configuration validation failed: {', '.join(self.messages)}")


class PhaseError(PageObjectError):
    """A whole extraction phase failed; the call is aborted."""

    def __init__(self, phase: str, reason: str, cause: Optional[BaseException] = None):
        self.phase = phase
        self.reason = reason
        self.cause = cause
        super().__init__(f"{phase} failed: {reason}")


class PhaseTimeoutError(PhaseError, TimeoutError):
    def __init__(self, phase: str, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(phase, f"timeout after {timeout_ms}ms")


class ElementExtractionError(PageObjectError):
    """Reading a single node failed. Absorbed by the orchestrator."""

    def __init__(self, index: int, reason: str):
        self.index = index
        super().__init__(f"Element {index} extraction failed: {reason}")


class VisibilityCheckError(PageObjectError):
    """A locator expression could not be re-resolved against the page."""
