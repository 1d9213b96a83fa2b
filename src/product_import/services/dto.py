"""Data Transfer Objects for the product import engine.

SimpleProduct is the unit of import. The caller creates it, every stage of
the import mutates it in place (reference resolution, validation, id
assignment, error accumulation), and result callbacks receive it at the end.

Example:
    product = SimpleProduct(
        sku="boot-001",
        attribute_set_id=Reference("Default"),
        url_key="leather-boot",
        category_ids=References(["Root/Men/Shoes"]),
        attributes={"name": "Leather Boot", "price": "89.95"},
    )
    config = ImportConfig(result_callbacks=[report])
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Union


@dataclass(frozen=True)
class Reference:
    """Symbolic reference to an entity by name, replaced by its id on import."""

    name: str


@dataclass(frozen=True)
class References:
    """Symbolic references to several entities by name."""

    names: List[str]

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)


# Record fields that carry data (as opposed to id/ok/errors bookkeeping)
CORE_FIELDS = ("sku", "attribute_set_id", "store_view_id", "url_key", "category_ids")


@dataclass
class SimpleProduct:
    """A simple product record.

    Attributes:
        sku: Natural key, unique across the store
        attribute_set_id: Attribute set id, or a Reference to its name
        store_view_id: Store view id (0 = all store views), or a Reference to its code
        url_key: Optional navigational key; request paths are generated from it
        category_ids: Category ids, or References to category name paths
        attributes: Sparse attribute values by attribute code
        id: Internal id, None until the importer assigns it
        ok: False once any stage has failed the record
        errors: Error messages, in the order they occurred
    """

    sku: Optional[str]
    attribute_set_id: Union[int, Reference, None] = None
    store_view_id: Union[int, Reference] = 0
    url_key: Optional[str] = None
    category_ids: Union[List[int], References] = field(default_factory=list)
    attributes: Dict[str, Any] = field(default_factory=dict)
    id: Optional[int] = None
    ok: bool = True
    errors: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Fail the record with a message. Errors accumulate."""
        self.ok = False
        self.errors.append(message)

    def get_value(self, attribute_code: str) -> Any:
        """Return the value the record carries for an attribute, or None."""
        if attribute_code in CORE_FIELDS:
            return getattr(self, attribute_code)
        return self.attributes.get(attribute_code)

    def present_attributes(self) -> List[str]:
        """Names of all core fields and sparse attributes with a non-null value."""
        names = [name for name in CORE_FIELDS if getattr(self, name) is not None]
        names.extend(
            code
            for code, value in self.attributes.items()
            if value is not None and code not in CORE_FIELDS
        )
        return names


ResultCallback = Callable[[SimpleProduct], Any]


@dataclass
class ImportConfig:
    """Options for one batch call.

    Attributes:
        dry_run: Run resolution and validation only, persist nothing
        result_callbacks: Called once per record after the batch concludes
    """

    dry_run: bool = False
    result_callbacks: List[ResultCallback] = field(default_factory=list)


@dataclass
class BatchResult:
    """Summary of a batch call.

    Per-record outcomes live on the records themselves; this only counts them.
    """

    total: int = 0
    inserted: int = 0
    updated: int = 0
    failed: int = 0
    dry_run: bool = False
    error: Optional[str] = None

    @property
    def committed(self) -> bool:
        """True if the batch's writes were committed."""
        return self.error is None and not self.dry_run

    def get_summary(self) -> str:
        """One-line human readable summary."""
        mode = " (dry run)" if self.dry_run else ""
        summary = (
            f"{self.total} products{mode}: {self.inserted} inserted, "
            f"{self.updated} updated, {self.failed} failed"
        )
        if self.error:
            summary += f"; batch rolled back: {self.error}"
        return summary
