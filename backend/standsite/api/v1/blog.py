# standsite/api/v1/blog.py
from flask import jsonify, request

from standsite.application import blog as service
from standsite.errors import PermissionDeniedError
from standsite.normalizers.blog import normalize_blog_post
from standsite.normalizers.pagination import normalize_pagination
from standsite.utils.decorators import admin_required, current_actor_id, is_admin_request
from standsite.utils.pagination import page_args
from standsite.utils.params import bool_arg
from . import v1_bp


def _status_filter():
    """Anything but the published listing is an admin view; ``all`` lists every post."""
    raw = request.args.get("status")
    if raw in (None, "", "published"):
        return "published"

    if not is_admin_request():
        raise PermissionDeniedError("Insufficient permissions")
    return None if raw == "all" else raw


@v1_bp.route("/blog/posts", methods=["GET"])
def list_blog_posts():
    page, limit = page_args(default_limit=10)
    status = _status_filter()

    related_to = request.args.get("related_to")
    if related_to:
        post = service.get_post(related_to)
        related = service.related_posts(post, limit=limit)
        data = normalize_pagination(
            related, normalize_blog_post, key="posts", page=1, limit=limit, total=len(related),
        )
        data["success"] = True
        return jsonify(data)

    posts, total = service.list_posts(
        page=page,
        limit=limit,
        status=status,
        category_slug=request.args.get("category"),
        tag_slug=request.args.get("tag"),
        is_featured=bool_arg("featured"),
        search=request.args.get("search"),
        sort_by=request.args.get("sort_by") or "published_at",
        sort_order=request.args.get("sort_order") or "desc",
        exclude_id=request.args.get("exclude"),
    )

    admin = status != "published"
    data = normalize_pagination(
        posts,
        lambda p: normalize_blog_post(p, admin=admin),
        key="posts",
        page=page,
        limit=limit,
        total=total,
    )
    data["success"] = True
    return jsonify(data)


@v1_bp.route("/blog/posts", methods=["POST"])
@admin_required
def create_blog_post():
    post = service.create_post(request.get_json(silent=True), actor_id=current_actor_id())
    return jsonify({"success": True, "post": normalize_blog_post(post, admin=True)}), 201


@v1_bp.route("/blog/posts/<id_or_slug>", methods=["GET"])
def get_blog_post(id_or_slug):
    admin = request.args.get("admin") == "true"
    if admin and not is_admin_request():
        raise PermissionDeniedError("Insufficient permissions")

    post = service.get_post(id_or_slug, admin=admin)
    if not admin:
        service.record_view(post)

    return jsonify({"success": True, "post": normalize_blog_post(post, detail=True, admin=admin)})


@v1_bp.route("/blog/posts/<id_or_slug>", methods=["PUT"])
@admin_required
def update_blog_post(id_or_slug):
    post = service.update_post(id_or_slug, request.get_json(silent=True))
    return jsonify({"success": True, "post": normalize_blog_post(post, admin=True)})


@v1_bp.route("/blog/posts/<id_or_slug>", methods=["DELETE"])
@admin_required
def delete_blog_post(id_or_slug):
    service.delete_post(id_or_slug)
    return jsonify({"success": True, "message": "Post deleted successfully"})
