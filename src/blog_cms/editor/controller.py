"""
blog_cms.editor.controller

Single-post authoring state machine.

Responsibilities:
- Load an existing post for editing (or start from an empty draft).
- Hold the editable fields and keep the derived slug in sync for new posts.
- Toggle between editing and preview without touching the store.
- Validate and save with exactly one store call per accepted submit.

States::

    Loading --load ok--> Editing <--toggle--> Previewing
                             |                     |
                             +------ submit -------+
                                        |
                                     Saving --store ok--> (navigate to post list)
                                        |
                                   store err / exception
                                        v
                              Error{message} (over Editing/Previewing)
"""

from __future__ import annotations

import enum
import uuid

from blog_cms.auth.session import AuthSession
from blog_cms.core.clock import Clock, utcnow
from blog_cms.core.result import Err, ErrorKind, Ok, Result
from blog_cms.editor.draft import Invalid, PostDraft, validate_draft
from blog_cms.navigation import Navigator
from blog_cms.observability.logging import get_logger
from blog_cms.posts.slug import slugify
from blog_cms.rendering.markdown import RenderedPost, render_post
from blog_cms.store.ports import Post, PostFilter, RecordStore

log = get_logger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred"
SAVE_IN_PROGRESS = "A save is already in progress"


class EditorState(enum.StrEnum):
    loading = "LOADING"
    editing = "EDITING"
    previewing = "PREVIEWING"
    saving = "SAVING"
    error = "ERROR"


class PostEditorController:
    def __init__(
        self,
        *,
        store: RecordStore,
        session: AuthSession,
        navigator: Navigator,
        post_id: uuid.UUID | None = None,
        list_path: str = "/admin/posts",
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._session = session
        self._navigator = navigator
        self._post_id = post_id
        self._list_path = list_path
        self._clock = clock

        self.draft = PostDraft()
        self._loading = post_id is not None
        self._not_found = False
        self._saving = False
        self._view = EditorState.editing
        self._error: str | None = None

    # -- state ---------------------------------------------------------------

    @property
    def state(self) -> EditorState:
        if self._loading:
            return EditorState.loading
        if self._saving:
            return EditorState.saving
        if self._error is not None:
            return EditorState.error
        return self._view

    @property
    def view(self) -> EditorState:
        """Editing or Previewing: the surface shown underneath any error message."""
        return self._view

    @property
    def error_message(self) -> str | None:
        return self._error

    @property
    def is_new(self) -> bool:
        return self._post_id is None

    @property
    def not_found(self) -> bool:
        return self._not_found

    @property
    def can_submit(self) -> bool:
        return not self._loading and not self._saving and not self._not_found

    # -- loading -------------------------------------------------------------

    async def load(self) -> Result[PostDraft]:
        if self._post_id is None:
            return Ok(self.draft)

        result = await self._store.select_one(PostFilter(id=self._post_id))
        if isinstance(result, Err):
            # Dead end for the hosting view, not a retryable editor error.
            log.info("post.edit_load_failed", post_id=str(self._post_id), detail=result.detail)
            self._not_found = True
            return Err(ErrorKind.not_found, "Post not found")

        self.draft = PostDraft.from_post(result.value)
        self._loading = False
        return Ok(self.draft)

    # -- field changes -------------------------------------------------------

    def set_title(self, value: str) -> None:
        self._field_changed()
        self.draft.title = value
        if self.is_new:
            # Overwrites any manual slug edit on a post that has not been saved yet.
            self.draft.slug = slugify(value)

    def set_slug(self, value: str) -> None:
        self._field_changed()
        self.draft.slug = value

    def set_content(self, markdown: str) -> None:
        self._field_changed()
        self.draft.content = markdown

    def set_excerpt(self, value: str) -> None:
        self._field_changed()
        self.draft.excerpt = value

    def set_cover_image(self, value: str) -> None:
        self._field_changed()
        self.draft.cover_image = value

    def set_published(self, value: bool) -> None:
        self._field_changed()
        self.draft.published = value

    def _field_changed(self) -> None:
        self._error = None

    # -- view toggle ---------------------------------------------------------

    def show_preview(self) -> None:
        self._view = EditorState.previewing

    def show_editor(self) -> None:
        self._view = EditorState.editing

    def preview(self) -> RenderedPost:
        d = self.draft
        return render_post(
            title=d.title, excerpt=d.excerpt, cover_image=d.cover_image, content=d.content
        )

    # -- save ----------------------------------------------------------------

    async def submit(self) -> Result[Post]:
        if self._saving:
            return Err(ErrorKind.busy, SAVE_IN_PROGRESS)
        if self._loading or self._not_found:
            return Err(ErrorKind.not_found, "Post not found")

        self._error = None
        checked = validate_draft(self.draft, self._session.acting_identity())
        if isinstance(checked, Invalid):
            self._error = checked.reason
            return Err(ErrorKind.validation, checked.reason)

        record = checked.record
        self._saving = True
        try:
            now = self._clock()
            if self._post_id is None:
                result = await self._store.insert(record.insert_fields(now))
            else:
                result = await self._store.update(self._post_id, record.update_fields(now))
        except Exception:
            log.exception("post.save_crashed", post_id=str(self._post_id) if self._post_id else None)
            self._saving = False
            self._error = UNEXPECTED_ERROR
            return Err(ErrorKind.unexpected, UNEXPECTED_ERROR)

        if isinstance(result, Err):
            log.warning(
                "post.save_failed",
                post_id=str(self._post_id) if self._post_id else None,
                kind=result.kind.value,
                detail=result.detail,
            )
            self._saving = False
            self._error = result.detail
            return result

        log.info("post.saved", post_id=str(result.value.id), created=self.is_new)
        # The row exists now; any further submit from this editor is an update.
        self._post_id = result.value.id
        try:
            self._navigator.go_to(self._list_path)
        except Exception:
            log.exception("post.navigate_after_save_failed", post_id=str(result.value.id))
            self._saving = False
            return result
        # Submit stays disabled: the hosting view is navigating away.
        return result


# --- Module Notes -----------------------------------------------------------
# The controller never retries and never discards the draft; a failed save leaves the
# user exactly where they were, with the message shown until the next edit or submit.
