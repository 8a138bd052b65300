"""Modal dialog contract and the three prompt variants built on it.

The host UI implements one primitive:

    async def prompt(title, content, buttons, default=None) -> None

`content` is the form template to show; `buttons` maps names to
DialogButtons. The host invokes at most one button's callback with the
submitted form values (field name -> raw string), awaits it, then closes.
Presentation is async (the dialog does not block the rest of the UI) but
prompt() only returns once the dialog is done.

Variants:
  edit_text()                          single textarea          -> str | None
  front_form(), danger_form(),
  secret_form()                        structured editors        -> *Input | None
  confirm()                            yes / no                  -> bool

Blank required text is rejected: the helper returns None and the caller
does nothing (no mutation, no save).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from html import escape
from typing import Protocol

from pydantic import BaseModel

from front_manager.models import XP_VALUES, Danger, FrontType, Secret

FormValues = dict[str, str]
ButtonCallback = Callable[[FormValues], Awaitable[None]]

DEFAULT_DANGER_TYPE = "Unknown"
DEFAULT_IMPULSE = "to cause chaos"
DEFAULT_DOOM = "Destruction"

_FRONT_TYPES: tuple[FrontType, ...] = ("campaign", "adventure")


@dataclass
class DialogButton:
    label: str
    callback: ButtonCallback | None = None


class Dialogs(Protocol):
    async def prompt(
        self,
        title: str,
        content: str,
        buttons: dict[str, DialogButton],
        default: str | None = None,
    ) -> None: ...


# ---------------------------------------------------------------------------
# Submitted form shapes
# ---------------------------------------------------------------------------

class FrontInput(BaseModel):
    name: str
    type: FrontType = "campaign"


class DangerInput(BaseModel):
    name: str
    danger_type: str = DEFAULT_DANGER_TYPE
    impulse: str = DEFAULT_IMPULSE
    impending_doom: str = DEFAULT_DOOM


class SecretInput(BaseModel):
    xp: int = 20
    text: str


# ---------------------------------------------------------------------------
# Variant helpers
# ---------------------------------------------------------------------------

async def _submit(
    dialogs: Dialogs,
    title: str,
    content: str,
    save_label: str,
    parse: Callable[[FormValues], object | None],
) -> object | None:
    """Show a save/cancel dialog and return the parsed submission, if any."""
    result: list[object] = []

    async def on_save(values: FormValues) -> None:
        parsed = parse(values)
        if parsed is not None:
            result.append(parsed)

    await dialogs.prompt(
        title,
        content,
        {"save": DialogButton(save_label, on_save), "cancel": DialogButton("Cancel")},
        default="save",
    )
    return result[0] if result else None


def _field(values: FormValues, name: str) -> str:
    return (values.get(name) or "").strip()


async def edit_text(dialogs: Dialogs, title: str, current: str = "") -> str | None:
    """Single-textarea editor. Returns the trimmed value, or None."""
    content = (
        '<form class="front-edit-dialog">'
        f'<textarea name="value" rows="3">{escape(current)}</textarea>'
        "</form>"
    )
    return await _submit(dialogs, title, content, "Save", lambda v: _field(v, "value") or None)


def parse_front(values: FormValues) -> FrontInput | None:
    name = _field(values, "name")
    kind = _field(values, "type") or "campaign"
    if not name or kind not in _FRONT_TYPES:
        return None
    return FrontInput(name=name, type=kind)


def parse_danger(values: FormValues, *, defaults: bool = True) -> DangerInput | None:
    """Parse a danger form. Blank optional fields take the creation defaults
    when `defaults` is set, and stay blank otherwise (editing)."""
    name = _field(values, "name")
    if not name:
        return None
    danger_type = _field(values, "dangerType")
    impulse = _field(values, "impulse")
    doom = _field(values, "doom")
    if defaults:
        danger_type = danger_type or DEFAULT_DANGER_TYPE
        impulse = impulse or DEFAULT_IMPULSE
        doom = doom or DEFAULT_DOOM
    return DangerInput(name=name, danger_type=danger_type, impulse=impulse, impending_doom=doom)


def parse_secret(values: FormValues) -> SecretInput | None:
    text = _field(values, "text")
    try:
        xp = int(_field(values, "xp") or XP_VALUES[0])
    except ValueError:
        return None
    if not text or xp not in XP_VALUES:
        return None
    return SecretInput(xp=xp, text=text)


async def front_form(dialogs: Dialogs) -> FrontInput | None:
    options = "".join(f'<option value="{t}">{t.title()} front</option>' for t in _FRONT_TYPES)
    content = (
        '<form class="front-edit-dialog">'
        '<label>Name</label><input type="text" name="name">'
        f'<label>Type</label><select name="type">{options}</select>'
        "</form>"
    )
    return await _submit(dialogs, "Create front", content, "Create", parse_front)


async def danger_form(dialogs: Dialogs, current: Danger | None = None) -> DangerInput | None:
    """Create a danger, or edit `current` when given."""
    fields = [
        ("name", "Name", current.name if current else ""),
        ("dangerType", "Type", current.danger_type if current else ""),
        ("impulse", "Impulse", current.impulse if current else ""),
        ("doom", "Impending Doom", current.impending_doom if current else ""),
    ]
    inputs = "".join(
        f'<label>{label}</label><input type="text" name="{name}" value="{escape(value)}">'
        for name, label, value in fields
    )
    content = f'<form class="front-edit-dialog">{inputs}</form>'
    if current is None:
        return await _submit(dialogs, "Create danger", content, "Create", parse_danger)
    return await _submit(
        dialogs, f"Edit danger: {current.name}", content, "Save",
        lambda v: parse_danger(v, defaults=False),
    )


async def secret_form(dialogs: Dialogs, current: Secret | None = None) -> SecretInput | None:
    selected = current.xp if current else XP_VALUES[0]
    options = "".join(
        f'<option value="{xp}"{" selected" if xp == selected else ""}>{xp}xp</option>'
        for xp in XP_VALUES
    )
    text = escape(current.text) if current else ""
    content = (
        '<form class="front-edit-dialog">'
        f'<label>XP</label><select name="xp">{options}</select>'
        f'<label>Secret</label><textarea name="text" rows="3">{text}</textarea>'
        "</form>"
    )
    if current is None:
        return await _submit(dialogs, "Create secret", content, "Create", parse_secret)
    return await _submit(dialogs, "Edit secret", content, "Save", parse_secret)


async def confirm(dialogs: Dialogs, title: str, question: str) -> bool:
    """Yes/no prompt. Closing the dialog without an answer counts as no."""
    answer: list[bool] = []

    async def yes(_: FormValues) -> None:
        answer.append(True)

    await dialogs.prompt(
        title,
        f"<p>{escape(question)}</p>",
        {"yes": DialogButton("Yes", yes), "no": DialogButton("No")},
        default="yes",
    )
    return bool(answer)
