"""Rendering configuration for bibparse output."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for canonical BibTeX output.

    Attributes:
        indent: Prefix written before each attribute line
        align: Pad attribute names to the longest one so ``=`` signs line up
    """

    indent: str = " "
    align: bool = True

    @classmethod
    def from_options(cls, indent_width: int = 1, align: bool = True) -> "RenderConfig":
        """Create configuration from command-line style options.

        Args:
            indent_width: Number of spaces before each attribute line
            align: Whether to align ``=`` signs

        Returns:
            RenderConfig with the given layout

        Raises:
            ValueError: If ``indent_width`` is negative
        """
        if indent_width < 0:
            raise ValueError(f"Indent width must be non-negative, got {indent_width}")
        return cls(indent=" " * indent_width, align=align)
