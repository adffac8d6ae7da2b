from typing import Any, Protocol, TypeVar

VT = TypeVar("VT")
_T_contra = TypeVar("_T_contra", contravariant=True)


class SupportsDunderLT(Protocol[_T_contra]):
    def __lt__(self, other: _T_contra, /) -> bool: ...


# Keys are only ever compared with `<` (directly or through bisect).
type SupportsKeyOrdering = SupportsDunderLT[Any]
KT = TypeVar("KT", bound=SupportsKeyOrdering)

type Breakpoint[K, V] = tuple[K, V]
type Interval[K, V] = tuple[K | None, K | None, V]
