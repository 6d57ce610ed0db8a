import ctypes
from enum import IntEnum, auto


class _ElementID(IntEnum):
    UINT64 = 1
    FLOAT64 = auto()


class _Scalar:
    """One 64-bit value stored as raw bytes, so it can be reinterpreted."""

    def __init__(self, val):
        cvt = float if self.element_id == _ElementID.FLOAT64 else int
        data = self.element_ctype(cvt(val))
        self._bytearray = bytearray(bytes(data))

    @property
    def value(self):
        return self.element_ctype.from_buffer(self._bytearray).value

    def __int__(self):
        return int(self.value)

    def __float__(self):
        return float(self.value)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._bytearray == other._bytearray

    def __hash__(self):
        return hash((type(self).__name__, bytes(self._bytearray)))

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"

    def to_bytearray(self):
        return self._bytearray

    @classmethod
    def from_bytes(cls, raw):
        self = super().__new__(cls)
        self._bytearray = bytearray(bytes(raw))
        return self


class BinaryType(type):
    _insta_cache = {}
    _prop_by_eid = {
        _ElementID.UINT64: ("uint64_t", ctypes.c_uint64),
        _ElementID.FLOAT64: ("float64_t", ctypes.c_double),
    }

    def __new__(cls, _, bases, attrs):
        element_id = attrs["element_id"]
        instance = cls._insta_cache.get(element_id)
        if instance:
            return instance
        element_name, element_ctype = cls._prop_by_eid[element_id]
        attrs.update(
            dict(element_ctype=element_ctype, element_size=ctypes.sizeof(element_ctype))
        )
        instance = super().__new__(cls, element_name, bases + (_Scalar,), attrs)
        BinaryType._insta_cache[element_id] = instance
        return instance

    @classmethod
    def byid(cls, element_id):
        return BinaryType(cls, (), dict(element_id=element_id))


class uint64_t(metaclass=BinaryType):
    element_id = _ElementID.UINT64


class float64_t(metaclass=BinaryType):
    element_id = _ElementID.FLOAT64
