"""Tick set value type returned by the generator."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TickSet:
    """Ticks for one axis.

    Attributes:
        values: Strictly increasing tick values, at least two
        labels: Display strings, index-aligned with values
        step: Uniform spacing between consecutive values (a nice number)
        synthetic: True if the requested range was replaced during normalization
        scientific: True if all labels use scientific notation
    """

    values: tuple[float, ...]
    labels: tuple[str, ...]
    step: float
    synthetic: bool = False
    scientific: bool = False

    def __len__(self) -> int:
        return len(self.values)

    def to_dict(self) -> dict:
        """Plain representation for the rendering layer: values, labels, step."""
        return {"values": list(self.values), "labels": list(self.labels), "step": self.step}
