from __future__ import annotations

"""Errors raised by the rotation core.

- ParseError is the only failure the core itself produces.
- ContractViolation is raised by the validation layer (schema) when a caller
  breaks the input contract, and by the resource when a rotation lands
  outside years 1-9999. The resolver never raises it.
- Errors propagate whole; no partial state is ever returned with them.
"""


class RotatingError(RuntimeError):
    """Base error for the time rotating resource."""


class ParseError(RotatingError):
    """Raised when a timestamp string is not RFC3339.

    Carries the offending value and the parser diagnostic so the caller can
    render both.
    """

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f'parsing time "{value}" as RFC3339: {reason}')


class ContractViolation(RotatingError):
    """Raised when configuration breaks the resource's input contract."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class UpdateNotSupportedError(ContractViolation):
    """Raised when the in-place update path is invoked.

    Every settable attribute forces replacement, so reaching update means the
    caller ignored the schema.
    """

    def __init__(self, changed: list[str]) -> None:
        super().__init__(
            [
                "time_rotating does not support in-place updates (changed: "
                + (", ".join(sorted(changed)) or "nothing")
                + "); changes must destroy and recreate the resource"
            ]
        )
        self.changed = sorted(changed)
