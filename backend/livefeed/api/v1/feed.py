"""Feed endpoints: post CRUD, image upload and the live event stream."""

from __future__ import annotations

from flask import Blueprint, Response, current_app, request

from livefeed.api.deps import current_auth, json_response, post_commands, post_queries, timing
from livefeed.core.extensions import get_hub
from livefeed.realtime.sse import SSE_HEADERS, stream_subscription
from livefeed.schemas import (
    ImageUploadResponseSchema,
    MetaSchema,
    PageQuerySchema,
    PostInputSchema,
    PostSchema,
)
from livefeed.services.posts import ImageUpload, PostIn

bp = Blueprint("feed", __name__, url_prefix="/feed")

post_schema = PostSchema()
post_list_schema = PostSchema(many=True)
post_input_schema = PostInputSchema()
page_query_schema = PageQuerySchema()
meta_schema = MetaSchema()
image_response_schema = ImageUploadResponseSchema()


@bp.get("/posts")
@timing
def list_posts():
    """Return one page of posts, newest first."""

    query = page_query_schema.load(request.args)
    page = post_queries().list_posts(current_auth(), query["page"])
    return json_response(
        {
            "message": "Fetched posts successfully.",
            "data": post_list_schema.dump(page.items),
            "meta": meta_schema.dump(page.meta),
        }
    )


@bp.post("/post")
@timing
def create_post():
    payload = post_input_schema.load(request.get_json(silent=True) or {})
    post = post_commands().create(current_auth(), PostIn(**payload))
    return json_response(
        {"message": "Post created successfully!", "data": post_schema.dump(post)},
        status=201,
    )


@bp.get("/post/<int:post_id>")
@timing
def get_post(post_id: int):
    post = post_queries().get_post(current_auth(), post_id)
    return json_response({"message": "Post fetched.", "data": post_schema.dump(post)})


@bp.put("/post/<int:post_id>")
@timing
def update_post(post_id: int):
    payload = post_input_schema.load(request.get_json(silent=True) or {})
    post = post_commands().update(current_auth(), post_id, PostIn(**payload))
    return json_response({"message": "Post updated!", "data": post_schema.dump(post)})


@bp.delete("/post/<int:post_id>")
@timing
def delete_post(post_id: int):
    post_commands().delete(current_auth(), post_id)
    return json_response({"message": "Deleted post."})


@bp.put("/post-image")
@timing
def upload_image():
    """Store a multipart ``image`` upload; ``oldPath`` names an image to discard."""

    file = request.files.get("image")
    upload = (
        ImageUpload(stream=file.stream, filename=file.filename or "", mimetype=file.mimetype)
        if file is not None
        else None
    )
    reference = post_commands().store_image(current_auth(), upload, request.form.get("oldPath"))
    message = "File stored." if reference else "No file provided!"
    return json_response(image_response_schema.dump({"message": message, "file_path": reference}))


@bp.get("/events")
def events():
    """Stream feed events as Server-Sent Events until the client disconnects."""

    hub = get_hub()
    sub = hub.subscribe()
    heartbeat = float(current_app.config.get("FEED_SSE_HEARTBEAT_SECONDS", 15.0))
    return Response(
        stream_subscription(hub, sub, heartbeat_seconds=heartbeat),
        mimetype="text/event-stream",
        headers=SSE_HEADERS,
    )
