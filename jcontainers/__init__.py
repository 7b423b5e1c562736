"""Form identifiers, expiring form references and balanced text wrapping."""

__version__ = "4.2.12"

__all__ = [
    "form_ids",
    "form_observer",
    "form_refs",
    "text_wrap",
]