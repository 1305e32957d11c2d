"""Bank statement CSV parsing."""

from dataclasses import dataclass
from typing import Mapping

from ledgerlink.domain.errors import ValidationError


@dataclass(frozen=True)
class StatementColumns:
    """Header names of the five statement columns.

    Defaults match the French bank export the application was built for.
    """

    date: str = "Date"
    value_date: str = "Date de valeur"
    amount: str = "Montant"
    description: str = "Libellé"
    balance: str = "Solde"

    @classmethod
    def from_string(cls, value: str) -> "StatementColumns":
        """Build from five comma-separated header names in column order.

        Raises:
            ValidationError: If the string does not name exactly five columns
        """
        names = [name.strip() for name in value.split(",")]
        if len(names) != 5 or not all(names):
            raise ValidationError(
                "Columns must be five comma-separated names: "
                "date, value date, amount, description, balance"
            )
        return cls(*names)

    def names(self) -> list[str]:
        return [self.date, self.value_date, self.amount, self.description, self.balance]


DEFAULT_COLUMNS = StatementColumns()


def parse_csv(csv_text: str) -> list[dict[str, str]]:
    """Parse CSV text into a list of header -> value mappings.

    The first line is the header row. Fields are split on commas and trimmed.
    Empty lines and lines whose field count differs from the header count are
    dropped without error.

    Args:
        csv_text: Decoded statement text

    Returns:
        One dict per well-formed data line, in file order
    """
    # Only "\n" ends a record; form feeds and Unicode separators belong to the field
    text = csv_text.strip()
    if not text:
        return []
    lines = text.split("\n")

    headers = [h.strip() for h in lines[0].split(",")]

    rows = []
    for line in lines[1:]:
        line = line.strip()
        if not line:
            continue

        values = [v.strip() for v in line.split(",")]
        if len(values) != len(headers):
            continue

        rows.append(dict(zip(headers, values)))

    return rows


def find_missing_columns(row: Mapping[str, str], columns: StatementColumns = DEFAULT_COLUMNS) -> list[str]:
    """Return the required column names absent from a parsed row."""
    return [name for name in columns.names() if name not in row]
