"""Pure record domain logic - no I/O dependencies."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Record:
    """A raw item as returned by the hiring endpoint."""

    id: int
    group_key: int
    name: str | None = None

    @property
    def is_valid(self) -> bool:
        return is_valid(self)

    @classmethod
    def from_api(cls, data: dict) -> "Record":
        """
        Create Record from an API response object.

        Raises ValueError for objects missing `id`/`listId` or carrying
        values of the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        try:
            record_id = data["id"]
            list_id = data["listId"]
        except KeyError as e:
            raise ValueError(f"Missing required field {e.args[0]!r}") from e

        # bool is an int subclass, but true/false is never a valid id
        for field_name, value in (("id", record_id), ("listId", list_id)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Field {field_name!r} must be an integer, got {value!r}")

        name = data.get("name")
        if name is not None and not isinstance(name, str):
            raise ValueError(f"Field 'name' must be a string or null, got {name!r}")

        return cls(id=record_id, group_key=list_id, name=name)


def is_valid(record: Record) -> bool:
    """A record is displayable when its name is present and not blank."""
    return record.name is not None and record.name.strip() != ""


def filter_valid(records: list[Record]) -> list[Record]:
    """
    Drop records without a usable display name.

    Pure function - no I/O.
    """
    return [r for r in records if is_valid(r)]


def record_sort_key(record: Record) -> tuple[int, str]:
    """Group key ascending, then name by plain code-point comparison."""
    return (record.group_key, record.name or "")


def sort_records(records: list[Record]) -> list[Record]:
    """
    Sort valid records by group key, then name.

    Names compare character by character, so "Item 280" sorts before
    "Item 29". Python's sort is stable, so duplicate (group_key, name)
    pairs keep their input order.

    Pure function - no I/O.
    """
    return sorted(records, key=record_sort_key)


def validate_and_sort(records: list[Record]) -> list[Record]:
    """Filter then sort; the shape stored on a successful fetch."""
    return sort_records(filter_valid(records))
