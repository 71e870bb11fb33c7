"""
Measurement & Unit Model
========================

Value + unit pairs used by ingredient stock and recipe lines.

Units fall into three compatibility classes:

    mass     gram, kilogram
    volume   milliliter, liter
    count    piece

Conversion only exists inside a class. Asking for a conversion across
classes yields ``None`` ("no conversion"), never a number, so callers
must treat it as "cannot reason about this pair" rather than as zero.

Example:
    Convert a recipe requirement into the stock unit::

        from apps.inventory.measurement import Measurement, MeasurementUnit

        sugar = Measurement(50, MeasurementUnit.GRAM)
        sugar.converted(MeasurementUnit.KILOGRAM)   # Measurement(0.05, 'kg')
        sugar.converted(MeasurementUnit.PIECE)      # None

Note:
    Comparisons between incompatible measurements return ``False`` in
    every direction, so ``a < b`` and ``a >= b`` can both be false. Use
    :meth:`Measurement.is_compatible_with` first when that matters.
"""

from django.db import models

from .services.exceptions import MalformedRecordError


class MeasurementUnit(models.TextChoices):
    GRAM = 'g', 'Gram'
    KILOGRAM = 'kg', 'Kilogram'
    MILLILITER = 'ml', 'Milliliter'
    LITER = 'l', 'Liter'
    PIECE = 'piece', 'Piece'

    @property
    def short_name(self):
        return 'pc' if self is MeasurementUnit.PIECE else self.value

    @property
    def base_unit(self):
        return _BASE_UNIT[self]

    def is_compatible_with(self, other):
        return _BASE_UNIT[self] is _BASE_UNIT[MeasurementUnit(other)]


_BASE_UNIT = {
    MeasurementUnit.GRAM: MeasurementUnit.GRAM,
    MeasurementUnit.KILOGRAM: MeasurementUnit.GRAM,
    MeasurementUnit.MILLILITER: MeasurementUnit.MILLILITER,
    MeasurementUnit.LITER: MeasurementUnit.MILLILITER,
    MeasurementUnit.PIECE: MeasurementUnit.PIECE,
}

# How many base units one unit holds
_BASE_FACTOR = {
    MeasurementUnit.GRAM: 1.0,
    MeasurementUnit.KILOGRAM: 1000.0,
    MeasurementUnit.MILLILITER: 1.0,
    MeasurementUnit.LITER: 1000.0,
    MeasurementUnit.PIECE: 1.0,
}


def conversion_factor(from_unit, to_unit):
    """Multiplier taking a value in ``from_unit`` to ``to_unit``, or None."""
    from_unit = MeasurementUnit(from_unit)
    to_unit = MeasurementUnit(to_unit)
    if not from_unit.is_compatible_with(to_unit):
        return None
    if from_unit is to_unit:
        return 1.0
    return _BASE_FACTOR[from_unit] / _BASE_FACTOR[to_unit]


def convert(value, from_unit, to_unit):
    """
    Convert ``value`` between units.

    Returns:
        Measurement in ``to_unit``, or None when the units belong to
        different compatibility classes.
    """
    return Measurement(value, from_unit).converted(to_unit)


class Measurement:
    """
    Non-negative quantity in a unit.

    Negative inputs are clamped to zero at construction time, so every
    Measurement satisfies ``value >= 0``. Instances are immutable and
    hashable.
    """

    __slots__ = ('_value', '_unit')

    def __init__(self, value, unit):
        try:
            unit = MeasurementUnit(unit)
        except ValueError:
            raise MalformedRecordError(f"Unknown measurement unit: {unit!r}")
        self._value = max(0.0, float(value))
        self._unit = unit

    @property
    def value(self):
        return self._value

    @property
    def unit(self):
        return self._unit

    def __repr__(self):
        return f"Measurement({self._value!r}, {self._unit.value!r})"

    def __str__(self):
        return self.display

    @property
    def display(self):
        """Value with up to two decimals and the short unit, e.g. ``1.5 kg``."""
        text = f"{self._value:,.2f}".rstrip('0').rstrip('.')
        return f"{text} {self._unit.short_name}"

    # Serialization

    def to_dict(self):
        return {'value': self._value, 'unit': self._unit.value}

    @classmethod
    def from_dict(cls, data):
        """
        Decode ``{'value': <number>, 'unit': <code>}``.

        Raises:
            MalformedRecordError: missing keys, non-numeric value or unknown unit
        """
        if not isinstance(data, dict) or 'value' not in data or 'unit' not in data:
            raise MalformedRecordError(f"Malformed measurement: {data!r}")
        value = data['value']
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedRecordError(f"Measurement value must be numeric: {value!r}")
        return cls(value, data['unit'])

    # Conversion

    def is_compatible_with(self, other):
        unit = other.unit if isinstance(other, Measurement) else other
        return self._unit.is_compatible_with(unit)

    def converted(self, unit):
        """Same amount expressed in ``unit``, or None across classes."""
        factor = conversion_factor(self._unit, unit)
        if factor is None:
            return None
        return Measurement(self._value * factor, unit)

    # Arithmetic

    def multiplied(self, by):
        return Measurement(self._value * by, self._unit)

    def adding(self, other):
        converted = other.converted(self._unit)
        if converted is None:
            return None
        return Measurement(self._value + converted.value, self._unit)

    def subtracting(self, other):
        """Difference in this unit, clamped at zero; None across classes."""
        converted = other.converted(self._unit)
        if converted is None:
            return None
        return Measurement(max(0.0, self._value - converted.value), self._unit)

    # Comparison: right operand is converted into the left operand's unit

    def _compare(self, other, op):
        if not isinstance(other, Measurement):
            return NotImplemented
        converted = other.converted(self._unit)
        if converted is None:
            return False
        return op(self._value, converted.value)

    def __lt__(self, other):
        return self._compare(other, lambda a, b: a < b)

    def __le__(self, other):
        return self._compare(other, lambda a, b: a <= b)

    def __gt__(self, other):
        return self._compare(other, lambda a, b: a > b)

    def __ge__(self, other):
        return self._compare(other, lambda a, b: a >= b)

    def __eq__(self, other):
        return self._compare(other, lambda a, b: a == b)

    def __hash__(self):
        base = self._unit.base_unit
        return hash((round(self._value * _BASE_FACTOR[self._unit], 9), base))
