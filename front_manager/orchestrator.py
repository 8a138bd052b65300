"""Mutation orchestrator: every edit the user can make to the fronts tree.

Mutation flow (add/edit/delete of any field or line item):
  1. Collect input (dialog) and, for deletions, ask for confirmation.
     This happens outside the mutation lock, so an open dialog does not
     hold up anything else.
  2. Take the mutation lock.
  3. Resolve the target in the current in-memory document. If it is gone
     (deleted elsewhere between render and click), abandon with a warning.
  4. Apply the change in memory.
  5. save_all(). On failure: restore the pre-mutation copy, notify, and
     stop. No refetch, no render.
  6. Refetch the whole document, replacing the local one, then render.
     The refetch result is ground truth; nothing is merged.

Toggles (secret revealed, portent completed) are the exception: the server
flips the flag and returns the entity, then the same refetch-and-render
follows.

The lock covers steps 2-6, so a second action can only resolve its target
once the first one's save and refetch have both landed. Without it, the
second save would send a document that predates the first save's result.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from front_manager import accessors
from front_manager.client import RemoteStore, StoreError
from front_manager.config import Settings
from front_manager.dialogs import (
    Dialogs,
    confirm,
    danger_form,
    edit_text,
    front_form,
    secret_form,
)
from front_manager.models import Danger, Front, FrontsDocument, Portent, Secret, new_id
from front_manager.ui import LoggingNotifier, Notifier, NullRenderer, Renderer
from front_manager.ui_state import UiState, build_view

logger = logging.getLogger(__name__)

Resolver = Callable[[FrontsDocument | None], Any]


class FrontManager:
    """Owns the fronts document and the UI state for one open window.

    Construct it with a store and a dialog host; pass it to whatever handles
    UI events. See front_manager.session for the single-instance handle.
    """

    def __init__(
        self,
        store: RemoteStore,
        dialogs: Dialogs,
        notifier: Notifier | None = None,
        renderer: Renderer | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._store = store
        self._dialogs = dialogs
        self._notifier = notifier or LoggingNotifier()
        self._renderer = renderer or NullRenderer()
        self._settings = settings or Settings()
        self._document: FrontsDocument | None = None
        self._index = accessors.DangerIndex()
        self._lock = asyncio.Lock()
        self.ui = UiState()

    @property
    def document(self) -> FrontsDocument | None:
        return self._document

    @property
    def busy(self) -> bool:
        """True while a mutation round trip is in flight."""
        return self._lock.locked()

    # ------------------------------------------------------------------
    # Loading and rendering
    # ------------------------------------------------------------------

    def _replace(self, document: FrontsDocument | None) -> None:
        self._document = document
        self._index = accessors.DangerIndex.build(document)

    async def _fetch(self) -> bool:
        """Fetch the whole document. On failure the held document is kept
        and the error is recorded for the view."""
        self.ui.begin_loading()
        try:
            document = await self._store.fetch_all()
        except StoreError as e:
            logger.error("Failed to fetch fronts: %s", e)
            self.ui.error = f"Connection to the fronts store failed: {e}"
            return False
        finally:
            self.ui.finish_loading()
        self._replace(document)
        return True

    def view(self) -> dict[str, Any]:
        return build_view(self._document, self.ui)

    def render(self) -> None:
        """Re-render, keeping the user's scroll position across the redraw."""
        self.ui.scroll_position = self._renderer.scroll_position()
        self._renderer.render(self.view())
        if self.ui.scroll_position > 0:
            self._renderer.restore_scroll(self.ui.scroll_position)

    async def load(self) -> None:
        """Fetch on first need, then render."""
        if self._document is None and not self.ui.loading:
            async with self._lock:
                if self._document is None:
                    await self._fetch()
        self.render()

    async def refresh(self) -> bool:
        """Drop the held document and fetch it fresh."""
        async with self._lock:
            self._replace(None)
            ok = await self._fetch()
            self.render()
        if ok:
            self._notifier.info("Fronts refreshed")
        return ok

    def toggle_front(self, front_id: str) -> None:
        self.ui.toggle_front(front_id)
        self.render()

    def toggle_danger(self, danger_id: str) -> None:
        self.ui.toggle_danger(danger_id)
        self.render()

    # ------------------------------------------------------------------
    # The mutation protocol
    # ------------------------------------------------------------------

    async def _mutate(
        self,
        what: str,
        resolve: Resolver,
        apply: Callable[[Any], None],
        after: Callable[[], None] | None = None,
    ) -> bool:
        """Resolve, apply, save, refetch, render. Returns True once saved."""
        async with self._lock:
            target = resolve(self._document)
            if target is None:
                self._abandon(what)
                return False

            snapshot = self._document.model_copy(deep=True)
            apply(target)

            try:
                await self._store.save_all(self._document)
            except StoreError as e:
                logger.error("Failed to save fronts (%s): %s", what, e)
                self._replace(snapshot)
                self._notifier.error(f"Failed to save: {e}")
                return False
            except BaseException:
                logger.exception("Unexpected failure saving fronts (%s)", what)
                self._replace(snapshot)
                raise

            await self._reload()
            if after is not None:
                after()
            self.render()
            return True

    async def _reload(self) -> None:
        """Refetch after a write. A failure here is transient: the saved
        document stays on screen and the user gets a toast."""
        if not await self._fetch():
            self._notifier.error(self.ui.error or "Failed to reload fronts")

    def _abandon(self, what: str) -> None:
        logger.warning("Abandoned %s: target no longer exists", what)
        self._notifier.warn(f"Cannot {what}: it no longer exists")

    async def _confirmed(self, kind: str, title: str, question: str) -> bool:
        if kind not in self._settings.confirm_deletions:
            return True
        return await confirm(self._dialogs, title, question)

    # Resolvers. Each returns None when the target is gone.

    def _front(self, front_id: str) -> Resolver:
        return lambda doc: accessors.find_front(doc, front_id)

    def _danger(self, danger_id: str) -> Resolver:
        def resolve(doc: FrontsDocument | None) -> Danger | None:
            ref = accessors.find_danger(doc, danger_id, self._index)
            return ref.danger if ref else None
        return resolve

    def _portent(self, danger_id: str, portent_id: str) -> Resolver:
        return lambda doc: accessors.find_portent(self._danger(danger_id)(doc), portent_id)

    def _secret(self, danger_id: str, secret_id: str) -> Resolver:
        return lambda doc: accessors.find_secret(self._danger(danger_id)(doc), secret_id)

    # Generic line-item and field edits

    async def _edit_field(self, resolve: Resolver, attr: str, title: str) -> bool:
        target = resolve(self._document)
        if target is None:
            self._abandon(f"edit {attr}")
            return False
        value = await edit_text(self._dialogs, title, getattr(target, attr))
        if value is None:
            return False
        saved = await self._mutate(f"edit {attr}", resolve, lambda t: setattr(t, attr, value))
        if saved:
            self._notifier.info("Saved")
        return saved

    async def _add_item(self, resolve: Resolver, attr: str, title: str) -> bool:
        value = await edit_text(self._dialogs, title)
        if value is None:
            return False
        saved = await self._mutate(f"add to {attr}", resolve, lambda t: getattr(t, attr).append(value))
        if saved:
            self._notifier.info("Saved")
        return saved

    async def _edit_item(self, resolve: Resolver, attr: str, index: int, title: str) -> bool:
        items = _items_at(resolve(self._document), attr, index)
        if items is None:
            self._abandon(f"edit {attr} entry")
            return False
        value = await edit_text(self._dialogs, title, items[index])
        if value is None:
            return False

        def apply(items: list[str]) -> None:
            items[index] = value

        saved = await self._mutate(
            f"edit {attr} entry", lambda doc: _items_at(resolve(doc), attr, index), apply,
        )
        if saved:
            self._notifier.info("Saved")
        return saved

    async def _delete_item(self, resolve: Resolver, attr: str, index: int, kind: str) -> bool:
        if not await self._confirmed(kind, "Delete entry", "Really delete this entry?"):
            return False
        return await self._mutate(
            f"delete {attr} entry",
            lambda doc: _items_at(resolve(doc), attr, index),
            lambda items: items.pop(index),
        )

    # ------------------------------------------------------------------
    # Fronts
    # ------------------------------------------------------------------

    async def add_front(self) -> Front | None:
        data = await front_form(self._dialogs)
        if data is None:
            return None
        front = Front(id=new_id("front"), name=data.name, type=data.type)
        saved = await self._mutate(
            "create front",
            lambda doc: doc,
            lambda doc: doc.fronts.append(front),
            after=lambda: self.ui.expand_front(front.id),
        )
        if not saved:
            return None
        self._notifier.info(f'Front "{front.name}" created')
        return front

    async def edit_front_name(self, front_id: str) -> bool:
        return await self._edit_field(self._front(front_id), "name", "Front name")

    async def add_cast(self, front_id: str) -> bool:
        return await self._add_item(self._front(front_id), "cast", "New cast entry")

    async def edit_cast(self, front_id: str, index: int) -> bool:
        return await self._edit_item(self._front(front_id), "cast", index, "Edit cast")

    async def delete_cast(self, front_id: str, index: int) -> bool:
        return await self._delete_item(self._front(front_id), "cast", index, "front-item")

    async def add_stake(self, front_id: str) -> bool:
        return await self._add_item(self._front(front_id), "stakes", "New stake")

    async def edit_stake(self, front_id: str, index: int) -> bool:
        return await self._edit_item(self._front(front_id), "stakes", index, "Edit stake")

    async def delete_stake(self, front_id: str, index: int) -> bool:
        return await self._delete_item(self._front(front_id), "stakes", index, "front-item")

    async def add_player_hook(self, front_id: str) -> bool:
        return await self._add_item(self._front(front_id), "player_hooks", "New player hook")

    async def edit_player_hook(self, front_id: str, index: int) -> bool:
        return await self._edit_item(self._front(front_id), "player_hooks", index, "Edit player hook")

    async def delete_player_hook(self, front_id: str, index: int) -> bool:
        return await self._delete_item(self._front(front_id), "player_hooks", index, "front-item")

    # ------------------------------------------------------------------
    # Dangers
    # ------------------------------------------------------------------

    async def add_danger(self, front_id: str) -> Danger | None:
        data = await danger_form(self._dialogs)
        if data is None:
            return None
        danger = Danger(
            id=new_id("danger"),
            name=data.name,
            danger_type=data.danger_type,
            impulse=data.impulse,
            impending_doom=data.impending_doom,
        )
        saved = await self._mutate(
            "create danger",
            self._front(front_id),
            lambda front: front.dangers.append(danger),
            after=lambda: self.ui.expand_danger(danger.id),
        )
        if not saved:
            return None
        self._notifier.info(f'Danger "{danger.name}" created')
        return danger

    async def edit_danger(self, danger_id: str) -> bool:
        current = self._danger(danger_id)(self._document)
        if current is None:
            self._abandon("edit danger")
            return False
        data = await danger_form(self._dialogs, current)
        if data is None:
            return False

        def apply(danger: Danger) -> None:
            danger.name = data.name
            danger.danger_type = data.danger_type
            danger.impulse = data.impulse
            danger.impending_doom = data.impending_doom

        saved = await self._mutate("edit danger", self._danger(danger_id), apply)
        if saved:
            self._notifier.info("Danger updated")
        return saved

    async def delete_danger(self, front_id: str, danger_id: str) -> bool:
        if not await self._confirmed("danger", "Delete danger", "Really delete this danger?"):
            return False

        def resolve(doc: FrontsDocument | None) -> Front | None:
            front = accessors.find_front(doc, front_id)
            if front is None or not any(d.id == danger_id for d in front.dangers):
                return None
            return front

        def apply(front: Front) -> None:
            front.dangers = [d for d in front.dangers if d.id != danger_id]

        return await self._mutate("delete danger", resolve, apply)

    async def edit_impulse(self, danger_id: str) -> bool:
        return await self._edit_field(self._danger(danger_id), "impulse", "Edit impulse")

    async def edit_doom(self, danger_id: str) -> bool:
        return await self._edit_field(self._danger(danger_id), "impending_doom", "Edit impending doom")

    # ------------------------------------------------------------------
    # Grim portents
    # ------------------------------------------------------------------

    async def add_portent(self, danger_id: str) -> bool:
        text = await edit_text(self._dialogs, "New grim portent")
        if text is None:
            return False
        portent = Portent(id=new_id("portent"), text=text)
        saved = await self._mutate(
            "add portent", self._danger(danger_id),
            lambda danger: danger.grim_portents.append(portent),
        )
        if saved:
            self._notifier.info("Saved")
        return saved

    async def edit_portent(self, danger_id: str, portent_id: str) -> bool:
        return await self._edit_field(self._portent(danger_id, portent_id), "text", "Edit portent")

    async def delete_portent(self, danger_id: str, portent_id: str) -> bool:
        if not await self._confirmed("portent", "Delete portent", "Really delete this portent?"):
            return False

        def resolve(doc: FrontsDocument | None) -> Danger | None:
            if self._portent(danger_id, portent_id)(doc) is None:
                return None
            return self._danger(danger_id)(doc)

        def apply(danger: Danger) -> None:
            danger.grim_portents = [p for p in danger.grim_portents if p.id != portent_id]

        return await self._mutate("delete portent", resolve, apply)

    async def toggle_portent(self, danger_id: str, portent_id: str) -> Portent | None:
        async with self._lock:
            try:
                portent = await self._store.toggle_portent(danger_id, portent_id)
            except StoreError as e:
                logger.error("Failed to toggle portent %s: %s", portent_id, e)
                self._notifier.error(f"Error: {e}")
                return None
            await self._reload()
            self.render()
        return portent

    # ------------------------------------------------------------------
    # Secrets
    # ------------------------------------------------------------------

    async def add_secret(self, danger_id: str) -> Secret | None:
        data = await secret_form(self._dialogs)
        if data is None:
            return None
        secret = Secret(id=new_id("secret"), xp=data.xp, text=data.text)
        saved = await self._mutate(
            "add secret", self._danger(danger_id),
            lambda danger: danger.secrets.append(secret),
        )
        if not saved:
            return None
        self._notifier.info("Secret created")
        return secret

    async def edit_secret(self, danger_id: str, secret_id: str) -> bool:
        resolve = self._secret(danger_id, secret_id)
        current = resolve(self._document)
        if current is None:
            self._abandon("edit secret")
            return False
        data = await secret_form(self._dialogs, current)
        if data is None:
            return False

        def apply(secret: Secret) -> None:
            secret.xp = data.xp
            secret.text = data.text

        saved = await self._mutate("edit secret", resolve, apply)
        if saved:
            self._notifier.info("Secret updated")
        return saved

    async def delete_secret(self, danger_id: str, secret_id: str) -> bool:
        if not await self._confirmed("secret", "Delete secret", "Really delete this secret?"):
            return False

        def resolve(doc: FrontsDocument | None) -> Danger | None:
            if self._secret(danger_id, secret_id)(doc) is None:
                return None
            return self._danger(danger_id)(doc)

        def apply(danger: Danger) -> None:
            danger.secrets = [s for s in danger.secrets if s.id != secret_id]

        return await self._mutate("delete secret", resolve, apply)

    async def toggle_secret(self, danger_id: str, secret_id: str) -> Secret | None:
        """Ask the server to flip a secret. The notification is built from the
        secret the server returns, never from local state."""
        async with self._lock:
            try:
                secret = await self._store.toggle_secret(danger_id, secret_id)
            except StoreError as e:
                logger.error("Failed to toggle secret %s: %s", secret_id, e)
                self._notifier.error(f"Error: {e}")
                return None
            await self._reload()
            self.render()

        if secret.revealed:
            self._notifier.info(f"Secret revealed: {secret.text[:50]}...")
        else:
            self._notifier.info("Secret reset")
        return secret

    # ------------------------------------------------------------------
    # Locations
    # ------------------------------------------------------------------

    async def add_location(self, danger_id: str) -> bool:
        return await self._add_item(self._danger(danger_id), "locations", "New location")

    async def edit_location(self, danger_id: str, index: int) -> bool:
        return await self._edit_item(self._danger(danger_id), "locations", index, "Edit location")

    async def delete_location(self, danger_id: str, index: int) -> bool:
        return await self._delete_item(self._danger(danger_id), "locations", index, "location")


def _items_at(target: Any, attr: str, index: int) -> list[str] | None:
    """The list `target.<attr>` if it has an entry at `index`, else None."""
    if target is None:
        return None
    items = getattr(target, attr)
    if not 0 <= index < len(items):
        return None
    return items
