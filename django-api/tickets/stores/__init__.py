from tickets.stores.drafts import InMemoryDraftStore, SessionDraftStore
from tickets.stores.interfaces import (
    DraftStore,
    OrganizationStore,
    ProgramStore,
    VoucherStore,
    event_registration_key,
    program_purchase_key,
)

__all__ = [
    "DraftStore",
    "InMemoryDraftStore",
    "OrganizationStore",
    "ProgramStore",
    "SessionDraftStore",
    "VoucherStore",
    "event_registration_key",
    "program_purchase_key",
]
