"""Person Formatting — human-readable one-line summaries used in command results.

Invariants:
    - Pure string building, no IO
    - Optional fields (address for caregivers, notes) only shown when non-blank
"""

from carebook.core.person import Caregiver, Person, Senior


def format_senior(senior: Senior) -> str:
    parts = [
        senior.name,
        f"Risk: {senior.risk.value}",
        f"Phone: {senior.phone}",
        f"Address: {senior.details.address}",
    ]
    if senior.details.note.strip():
        parts.append(f"Notes: {senior.details.note}")
    if senior.caregiver is not None:
        parts.append(f"Caregiver: {senior.caregiver.name}")
    return "; ".join(parts)


def format_caregiver(caregiver: Caregiver) -> str:
    parts = [caregiver.name, f"Phone: {caregiver.phone}"]
    if caregiver.details.address.strip():
        parts.append(f"Address: {caregiver.details.address}")
    if caregiver.details.note.strip():
        parts.append(f"Notes: {caregiver.details.note}")
    return "; ".join(parts)


def format_person(person: Person) -> str:
    if isinstance(person, Senior):
        return format_senior(person)
    return format_caregiver(person)
