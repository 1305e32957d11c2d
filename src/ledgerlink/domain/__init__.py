"""Domain layer for ledgerlink application."""

# Services are imported lazily: the database layer imports domain entities,
# and eager service imports here would make that a cycle.
_SERVICES = {
    "OrganizationService": "ledgerlink.domain.organization",
    "ExpenseService": "ledgerlink.domain.expense",
    "ActivityService": "ledgerlink.domain.activity",
    "BankImportService": "ledgerlink.domain.bank_import",
    "AssociationService": "ledgerlink.domain.association",
    "FingerprintRecomputeService": "ledgerlink.domain.fingerprint_recompute",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
