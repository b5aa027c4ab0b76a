"""Named physical quantities and the registry that holds them.

Every quantity has a native unit, a display unit drawn from the fixed pairs in
:mod:`surfacefire.utilities.unit_conversions`, and exactly one owning pipeline
step. Only the owner may write a quantity, and only once per evaluation pass.

Classes:
    - Quantity: One named value with its units and presentation metadata.
    - QuantityRegistry: Named store of quantities shared by a pipeline.

.. autoclass:: Quantity
    :members:

.. autoclass:: QuantityRegistry
    :members:
"""
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional
import threading

from surfacefire.exceptions import PipelineError, ValidationError
from surfacefire.utilities.unit_conversions import display_conversion


class Quantity:
    """A named physical quantity.

    Enumerated quantities (``items`` given) store the index of the active item
    as their value. Flags store 0 or 1.

    Attributes:
        name (str): Unique identifier.
        value (float): Value in native units.
        unit (str): Native unit.
        display_unit (str): Unit used for display.
        decimals (int): Decimals shown when displayed.
        owner (str): Name of the pipeline step that computes this quantity.
        is_input (bool): True if the value comes straight from user configuration.
        items (List[str]): Labels of an enumerated quantity, or None.
    """

    def __init__(self, name: str, unit: str, owner: str, display_unit: Optional[str] = None,
                 decimals: int = 2, is_input: bool = False, items: Optional[List[str]] = None,
                 value: float = 0.0):
        self.name = name
        self.unit = unit
        self.display_unit = unit if display_unit is None else display_unit
        self.decimals = decimals
        self.owner = owner
        self.is_input = is_input
        self.items = list(items) if items is not None else None
        self._to_display = display_conversion(self.unit, self.display_unit)
        self.value = value

    def __repr__(self) -> str:
        return f"Quantity({self.name}={self.value!r} {self.unit})"

    @property
    def display_value(self) -> float:
        return round(float(self._to_display(self.value)), self.decimals)

    def coerce(self, value) -> float:
        """Converts enum members, labels and flags to the stored numeric value."""
        if self.items is not None:
            if isinstance(value, Enum):
                value = value.value
            if isinstance(value, str):
                if value not in self.items:
                    raise ValidationError(f"'{value}' is not an item of {self.name}",
                                          field=self.name, value=value)
                return float(self.items.index(value))
        if isinstance(value, bool):
            return 1.0 if value else 0.0
        return float(value)

    def active_index(self) -> int:
        if self.items is None:
            raise ValidationError("Quantity is not enumerated", field=self.name)
        return int(round(self.value))

    def active_label(self) -> str:
        return self.items[self.active_index()]

    def copy(self) -> "Quantity":
        q = Quantity.__new__(Quantity)
        q.__dict__.update(self.__dict__)
        if self.items is not None:
            q.items = list(self.items)
        return q


class QuantityRegistry:
    """Named store of quantities shared by the steps of a pipeline.

    The registry is passed explicitly to whatever evaluates it. ``lock``
    serializes whole evaluation passes; individual reads and writes are not
    locked.
    """

    def __init__(self, quantities: Iterable[Quantity] = ()):
        self._quantities: Dict[str, Quantity] = {}
        self._written = set()
        self.lock = threading.Lock()
        for q in quantities:
            self.declare(q)

    def declare(self, quantity: Quantity):
        if quantity.name in self._quantities:
            raise PipelineError("Quantity declared twice", quantity=quantity.name)
        self._quantities[quantity.name] = quantity

    def __contains__(self, name: str) -> bool:
        return name in self._quantities

    def __iter__(self) -> Iterator[Quantity]:
        return iter(self._quantities.values())

    def __len__(self) -> int:
        return len(self._quantities)

    def names(self) -> List[str]:
        return list(self._quantities)

    def get(self, name: str) -> Quantity:
        try:
            return self._quantities[name]
        except KeyError:
            raise PipelineError("Unknown quantity", quantity=name) from None

    def value(self, name: str) -> float:
        return self.get(name).value

    def begin_pass(self):
        """Starts a new evaluation pass, allowing every quantity one more write."""
        self._written.clear()

    def set(self, name: str, value, owner: str):
        """Writes a quantity on behalf of the step ``owner``.

        Raises:
            PipelineError: If ``owner`` does not own the quantity or it was
                already written in this pass.
        """
        q = self.get(name)
        if q.owner != owner:
            raise PipelineError(f"Quantity is owned by '{q.owner}'", step=owner, quantity=name)
        if name in self._written:
            raise PipelineError("Quantity written twice in one pass", step=owner, quantity=name)
        q.value = q.coerce(value)
        self._written.add(name)

    def written(self) -> List[str]:
        return sorted(self._written)

    def copy(self) -> "QuantityRegistry":
        """Independent working copy; the copy has its own lock."""
        return QuantityRegistry(q.copy() for q in self._quantities.values())

    def commit(self, values: Dict[str, float]):
        """Publishes the results of a completed pass."""
        for name, value in values.items():
            q = self.get(name)
            q.value = q.coerce(value)

    def snapshot(self) -> Dict[str, float]:
        return {name: q.value for name, q in self._quantities.items()}
