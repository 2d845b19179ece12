"""Data models for 4D draw results."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

CSV_HEADER = ['Date', 'Company', 'First', 'Second', 'Third', 'Special', 'Consolation']

SUBVALUE_SEPARATOR = '|'


class Company(Enum):
    """Known 4D operators, shared by the CSV files and the generated app."""

    MAGNUM = ('magnum', 'Magnum')
    TOTO = ('toto', 'Toto')
    DAMACAI = ('damacai', 'Da Ma Cai')

    def __init__(self, key: str, label: str):
        self.key = key
        self.label = label

    @property
    def filename(self) -> str:
        return f"{self.key}.csv"

    @classmethod
    def from_value(cls, value: Optional[str]) -> Optional['Company']:
        """Case-insensitive exact match against the company keys."""
        if not value:
            return None
        lowered = value.lower()
        for company in cls:
            if company.key == lowered:
                return company
        return None

    @classmethod
    def as_client_list(cls) -> List[Dict[str, str]]:
        return [{'key': c.key, 'label': c.label} for c in cls]


def _scalar(value: Any) -> str:
    if value is None:
        return ''
    return str(value)


def _split_numbers(value: Any) -> Tuple[str, ...]:
    """Split a comma-delimited cell (or list) into trimmed, non-empty parts."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        parts: Iterable[Any] = value
    else:
        parts = str(value).split(',')
    return tuple(p for p in (_scalar(x).strip() for x in parts) if p)


@dataclass(frozen=True)
class DrawRecord:
    """One draw result for one company on one date."""
    date: str
    company: str
    first: str
    second: str
    third: str
    special: Tuple[str, ...] = ()
    consolation: Tuple[str, ...] = ()

    @property
    def company_key(self) -> str:
        return self.company.lower()

    @property
    def numbers(self) -> List[str]:
        """Every winning number in field order (empty cells skipped)."""
        ordered = [self.first, self.second, self.third, *self.special, *self.consolation]
        return [n for n in ordered if n]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'DrawRecord':
        """Build a record from one row of the results sheet."""
        return cls(
            date=_scalar(row.get('Date')),
            company=_scalar(row.get('Company')),
            first=_scalar(row.get('First')),
            second=_scalar(row.get('Second')),
            third=_scalar(row.get('Third')),
            special=_split_numbers(row.get('Special')),
            consolation=_split_numbers(row.get('Consolation')),
        )

    def to_csv_row(self) -> List[str]:
        return [
            self.date,
            self.company,
            self.first,
            self.second,
            self.third,
            SUBVALUE_SEPARATOR.join(self.special),
            SUBVALUE_SEPARATOR.join(self.consolation),
        ]

    @classmethod
    def from_csv_row(cls, row: List[str]) -> 'DrawRecord':
        values = list(row) + [''] * (len(CSV_HEADER) - len(row))
        date, company, first, second, third, special, consolation = values[:len(CSV_HEADER)]
        return cls(
            date=date,
            company=company,
            first=first,
            second=second,
            third=third,
            special=tuple(special.split(SUBVALUE_SEPARATOR)) if special else (),
            consolation=tuple(consolation.split(SUBVALUE_SEPARATOR)) if consolation else (),
        )
