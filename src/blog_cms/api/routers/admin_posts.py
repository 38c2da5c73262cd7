"""
blog_cms.api.routers.admin_posts

Admin post management endpoints (guarded: admin only).

Responsibilities:
- Expose the post list controller (list, publish toggle, confirmed delete).
- Expose the editor controller (load for edit, create, update, preview).
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from blog_cms.api.deps import settings_dep, store_dep
from blog_cms.api.errors import raise_for_err, status_for
from blog_cms.api.schemas import PostOut, RenderedPostOut
from blog_cms.auth.deps import require
from blog_cms.auth.guard import Capability
from blog_cms.auth.session import AuthSession
from blog_cms.core.result import Err
from blog_cms.editor.controller import PostEditorController
from blog_cms.navigation import CollectingNotifier, FixedAnswer, RecordingNavigator
from blog_cms.posts.list_controller import PostListController
from blog_cms.settings import Settings
from blog_cms.store.ports import Post, RecordStore

_admin = require(Capability.require_admin)

router = APIRouter(prefix="/admin/posts", tags=["admin"], dependencies=[Depends(_admin)])


class DraftIn(BaseModel):
    """
    Editor field values. Omitted fields keep their loaded (or empty) value.
    """

    title: str | None = None
    slug: str | None = None
    content: str | None = None
    excerpt: str | None = None
    cover_image: str | None = None
    published: bool | None = None


class DraftOut(BaseModel):
    id: uuid.UUID | None
    is_new: bool
    state: str
    title: str
    slug: str
    content: str
    excerpt: str
    cover_image: str
    published: bool


class SaveResponse(BaseModel):
    post: PostOut
    redirect_to: str


class ToggleResponse(BaseModel):
    post: PostOut
    changed: bool


class DeleteResponse(BaseModel):
    deleted: uuid.UUID


def _apply(editor: PostEditorController, body: DraftIn) -> None:
    # Title first: on a new post it rewrites the slug, and an explicit slug must win.
    if body.title is not None:
        editor.set_title(body.title)
    if body.slug is not None:
        editor.set_slug(body.slug)
    if body.content is not None:
        editor.set_content(body.content)
    if body.excerpt is not None:
        editor.set_excerpt(body.excerpt)
    if body.cover_image is not None:
        editor.set_cover_image(body.cover_image)
    if body.published is not None:
        editor.set_published(body.published)


def _draft_out(editor: PostEditorController, post_id: uuid.UUID | None) -> DraftOut:
    d = editor.draft
    return DraftOut(
        id=post_id,
        is_new=editor.is_new,
        state=editor.state.value,
        title=d.title,
        slug=d.slug,
        content=d.content,
        excerpt=d.excerpt,
        cover_image=d.cover_image,
        published=d.published,
    )


async def _listed(controller: PostListController, post_id: uuid.UUID) -> Post:
    loaded = await controller.load()
    if isinstance(loaded, Err):
        raise_for_err(loaded)
    post = controller.find(post_id)
    if post is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Post not found")
    return post


@router.get("", response_model=list[PostOut])
async def list_posts(store: RecordStore = Depends(store_dep)) -> list[PostOut]:
    controller = PostListController(
        store=store, confirmer=FixedAnswer(False), notifier=CollectingNotifier()
    )
    result = await controller.load()
    if isinstance(result, Err):
        raise_for_err(result)
    return [PostOut.from_post(p) for p in controller.posts]


@router.post("/{post_id}/toggle-publish", response_model=ToggleResponse)
async def toggle_publish(post_id: uuid.UUID, store: RecordStore = Depends(store_dep)) -> ToggleResponse:
    controller = PostListController(
        store=store, confirmer=FixedAnswer(False), notifier=CollectingNotifier()
    )
    post = await _listed(controller, post_id)
    result = await controller.toggle_publish(post)
    # A failed toggle is logged by the controller and shows up only as an unchanged row.
    held = controller.find(post_id) or post
    return ToggleResponse(post=PostOut.from_post(held), changed=not isinstance(result, Err))


@router.delete("/{post_id}", response_model=DeleteResponse)
async def delete_post(
    post_id: uuid.UUID,
    confirm: bool = False,
    store: RecordStore = Depends(store_dep),
) -> DeleteResponse:
    notifier = CollectingNotifier()
    controller = PostListController(store=store, confirmer=FixedAnswer(confirm), notifier=notifier)
    post = await _listed(controller, post_id)
    result = await controller.delete(post)
    if isinstance(result, Err):
        notice = notifier.notices[-1] if notifier.notices else result.detail
        raise HTTPException(status_code=status_for(result), detail=notice)
    return DeleteResponse(deleted=post_id)


@router.post("/preview", response_model=RenderedPostOut)
async def preview_post(
    body: DraftIn,
    session: AuthSession = Depends(_admin),
    store: RecordStore = Depends(store_dep),
) -> RenderedPostOut:
    editor = PostEditorController(store=store, session=session, navigator=RecordingNavigator())
    _apply(editor, body)
    editor.show_preview()
    return RenderedPostOut.from_rendered(editor.preview())


@router.get("/{post_id}", response_model=DraftOut)
async def load_for_edit(
    post_id: uuid.UUID,
    session: AuthSession = Depends(_admin),
    store: RecordStore = Depends(store_dep),
) -> DraftOut:
    editor = PostEditorController(
        store=store, session=session, navigator=RecordingNavigator(), post_id=post_id
    )
    loaded = await editor.load()
    if isinstance(loaded, Err):
        raise_for_err(loaded)
    return _draft_out(editor, post_id)


@router.post("", response_model=SaveResponse, status_code=HTTP_201_CREATED)
async def create_post(
    body: DraftIn,
    session: AuthSession = Depends(_admin),
    store: RecordStore = Depends(store_dep),
    settings: Settings = Depends(settings_dep),
) -> SaveResponse:
    navigator = RecordingNavigator()
    editor = PostEditorController(
        store=store, session=session, navigator=navigator, list_path=settings.post_list_path
    )
    _apply(editor, body)
    return await _submit(editor, navigator, settings.post_list_path)


@router.put("/{post_id}", response_model=SaveResponse)
async def update_post(
    post_id: uuid.UUID,
    body: DraftIn,
    session: AuthSession = Depends(_admin),
    store: RecordStore = Depends(store_dep),
    settings: Settings = Depends(settings_dep),
) -> SaveResponse:
    navigator = RecordingNavigator()
    editor = PostEditorController(
        store=store,
        session=session,
        navigator=navigator,
        post_id=post_id,
        list_path=settings.post_list_path,
    )
    loaded = await editor.load()
    if isinstance(loaded, Err):
        raise_for_err(loaded)
    _apply(editor, body)
    return await _submit(editor, navigator, settings.post_list_path)


async def _submit(
    editor: PostEditorController, navigator: RecordingNavigator, list_path: str
) -> SaveResponse:
    result = await editor.submit()
    if isinstance(result, Err):
        # The editor's error message is the store text verbatim (or the validation reason).
        raise_for_err(result, detail=editor.error_message)
    destination = navigator.last
    redirect_to = destination.path if destination is not None else list_path
    return SaveResponse(post=PostOut.from_post(result.value), redirect_to=redirect_to)
