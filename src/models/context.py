"""
Shared execution context passed between plugins by the host runtime.
"""

from dataclasses import dataclass, field


@dataclass
class ExecutionContext:
    """
    Attribute store a host hands to a plugin call.

    Text attributes and flags are plugin inputs; binary attributes carry
    plugin outputs back to the host.
    """

    text: dict[str, str] = field(default_factory=dict)
    flags: dict[str, bool] = field(default_factory=dict)
    binary: dict[str, bytes] = field(default_factory=dict)

    def find_text(self, name: str) -> str | None:
        return self.text.get(name)

    def is_enabled(self, name: str) -> bool | None:
        """Flag value, or None when the flag was never set."""
        return self.flags.get(name)

    def add_text_attr(self, name: str, value: str) -> None:
        self.text[name] = value

    def enable(self, name: str, value: bool = True) -> None:
        self.flags[name] = value

    def add_binary_attr(self, name: str, value: bytes) -> None:
        self.binary[name] = bytes(value)

    def find_binary(self, name: str) -> bytes | None:
        return self.binary.get(name)
