"""Post endpoints mounted at /api/posts."""
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from dependencies import (RequestContext, check_own_post, db_dependency,
                          load_post, require_authenticated)
from errors import InvalidArgument
from schemas import PostCreate, PostOut, PostUpdate, truncate_body
import post_repository

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=PostOut, status_code=status.HTTP_200_OK)
def write_post(body: PostCreate,
               ctx: Annotated[RequestContext, Depends(require_authenticated)],
               db: db_dependency):
    """Create a new post authored by the logged-in user"""
    return post_repository.create_post(db, ctx.user, body.title, body.body, body.tags)


@router.get("", response_model=list[PostOut], status_code=status.HTTP_200_OK)
def list_posts(response: Response,
               db: db_dependency,
               page: int = Query(1, le=post_repository.MAX_PAGE),
               username: Optional[str] = None,
               tag: Optional[str] = None):
    """List posts newest first, ten per page, optionally by author and/or tag.

    Bodies are shortened for the list view and the ``Last-Page`` header
    tells the client how many pages match.
    """
    if page < 1:
        raise InvalidArgument("Page must be 1 or greater")

    posts = post_repository.list_posts(db, page=page, username=username, tag=tag)
    count = post_repository.count_posts(db, username=username, tag=tag)
    response.headers["Last-Page"] = str(post_repository.last_page(count))

    items = []
    for post in posts:
        item = PostOut.model_validate(post)
        items.append(item.model_copy(update={"body": truncate_body(item.body)}))
    return items


@router.get("/{post_id}", response_model=PostOut, status_code=status.HTTP_200_OK)
def read_post(ctx: Annotated[RequestContext, Depends(load_post)]):
    """Retrieve a single post with its full body"""
    return ctx.post


@router.patch("/{post_id}", response_model=PostOut, status_code=status.HTTP_200_OK)
def update_post(body: PostUpdate,
                ctx: Annotated[RequestContext, Depends(check_own_post)],
                db: db_dependency):
    """Update the given fields of a post the user owns"""
    return post_repository.update_post(db, ctx.post,
                                       title=body.title,
                                       body=body.body,
                                       tags=body.tags)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(ctx: Annotated[RequestContext, Depends(check_own_post)],
                db: db_dependency):
    """Delete a post the user owns"""
    post_repository.delete_post(db, ctx.post)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
