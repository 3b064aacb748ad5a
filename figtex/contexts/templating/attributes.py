"""
Attribute Sets

Ordered collections of presentation attributes where attributes of the same
kind are mutually exclusive. Every node of the document tree (picture, axis,
plot, histogram) owns one of these and renders it as its option block.

Examples:
    >>> options = AttributeSet(AxisKey)
    >>> options.insert(Attribute(AxisKey.X_MIN, 0))
    >>> options.insert("grid=major")
    >>> options.insert(Attribute(AxisKey.X_MIN, 5))
    >>> [str(option) for option in options]
    ['grid=major', 'xmin={5}']
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Type, Union

from figtex.utils.formatting import format_value


class AttributeKind(Enum):
    """
    Base class for attribute kind enumerations.

    Each subclass declares a CUSTOM member with value None, for verbatim keys
    that have no dedicated kind, and one member per mutually exclusive key
    whose value is its markup template (``{value}`` is the placeholder).
    """

    @property
    def is_custom(self) -> bool:
        return self.value is None

    def render(self, value: Any) -> str:
        if self.is_custom:
            return str(value)
        return self.value.format(value=format_value(value))


@dataclass(frozen=True)
class Attribute:
    """
    A single presentation setting.

    Attributes:
        kind: Identity used to detect mutual exclusivity
        value: Setting value (verbatim markup for custom attributes)
    """

    kind: AttributeKind
    value: Any = None

    def __str__(self) -> str:
        return self.kind.render(self.value)


class AttributeSet:
    """
    Ordered attributes with at most one attribute per non-custom kind.

    Inserting an attribute whose kind is already present removes the previous
    one and appends the new one, so the sequence order reflects the most
    recent write. Custom attributes are always appended.
    """

    def __init__(self, kind_type: Type[AttributeKind], attributes: Iterable = ()):
        self.kind_type = kind_type
        self._attributes: List[Attribute] = []
        for attribute in attributes:
            self.insert(attribute)

    def insert(self, attribute: Union[Attribute, str]) -> None:
        """
        Insert an attribute, overriding any previous attribute of the same kind.

        Args:
            attribute: Attribute to insert; a plain string is a custom attribute

        Raises:
            TypeError: If the attribute kind belongs to another kind enumeration
        """
        if isinstance(attribute, str):
            attribute = Attribute(self.kind_type.CUSTOM, attribute)

        if not isinstance(attribute.kind, self.kind_type):
            raise TypeError(
                f"{self.kind_type.__name__} attribute expected, got {attribute.kind!r}"
            )

        if not attribute.kind.is_custom:
            for index, existing in enumerate(self._attributes):
                if existing.kind is attribute.kind:
                    del self._attributes[index]
                    break

        self._attributes.append(attribute)

    def get(self, kind: AttributeKind) -> Optional[Attribute]:
        """Return the attribute of a non-custom kind, or None if unset."""
        for attribute in self._attributes:
            if attribute.kind is kind:
                return attribute
        return None

    def kinds(self) -> List[AttributeKind]:
        return [attribute.kind for attribute in self._attributes]

    def lines(self, indent: str) -> List[str]:
        """Render one ``<indent><attribute>,`` line per attribute."""
        return [f"{indent}{attribute}," for attribute in self._attributes]

    def __contains__(self, kind: AttributeKind) -> bool:
        return any(attribute.kind is kind for attribute in self._attributes)

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AttributeSet):
            return NotImplemented
        return self.kind_type is other.kind_type and self._attributes == other._attributes

    def __repr__(self) -> str:
        return f"AttributeSet({self.kind_type.__name__}, {self._attributes!r})"
