# standsite/api/v1/event_submissions.py
from flask import jsonify, request

from standsite.application import event_submissions as service
from standsite.normalizers.event_submission import normalize_event_submission
from standsite.normalizers.pagination import normalize_pagination
from standsite.utils.decorators import admin_required
from standsite.utils.pagination import page_args
from standsite.utils.params import bool_arg, client_ip, json_body
from . import v1_bp


@v1_bp.route("/events/submissions", methods=["POST"])
def submit_event_enquiry():
    submission = service.submit_event_enquiry(
        json_body(),
        ip_address=client_ip(),
        user_agent=request.headers.get("User-Agent"),
        referrer=request.headers.get("Referer"),
    )
    return jsonify({
        "success": True,
        "message": "Form submitted successfully",
        "submission_id": submission.id,
    }), 201


@v1_bp.route("/events/submissions", methods=["GET"])
@admin_required
def list_event_submissions():
    page, limit = page_args(default_limit=20)
    rows, total = service.list_event_submissions(
        page=page,
        limit=limit,
        status=request.args.get("status"),
        event_id=request.args.get("event_id"),
        search=request.args.get("search"),
        is_spam=bool_arg("is_spam"),
        sort_by=request.args.get("sort_by") or "created_at",
        sort_order=request.args.get("sort_order") or "desc",
    )

    data = normalize_pagination(
        rows,
        normalize_event_submission,
        key="submissions",
        page=page,
        limit=limit,
        total=total,
    )
    data["success"] = True
    return jsonify(data)


@v1_bp.route("/events/submissions", methods=["PUT"])
@admin_required
def bulk_update_event_submissions():
    data = json_body()
    rows = service.bulk_update_event_submissions(
        data.get("action"),
        data.get("submission_ids"),
        data.get("data"),
    )
    return jsonify({
        "success": True,
        "updated_count": len(rows),
        "submissions": [normalize_event_submission(s) for s in rows],
    })


@v1_bp.route("/events/submissions", methods=["DELETE"])
@admin_required
def bulk_delete_event_submissions():
    deleted = service.bulk_delete_event_submissions(json_body().get("submission_ids"))
    return jsonify({
        "success": True,
        "deleted_count": len(deleted),
        "deleted_submissions": deleted,
    })


@v1_bp.route("/events/submissions/<submission_id>", methods=["GET"])
@admin_required
def get_event_submission(submission_id):
    submission = service.get_event_submission(submission_id)
    return jsonify({"success": True, "submission": normalize_event_submission(submission, detail=True)})


@v1_bp.route("/events/submissions/<submission_id>", methods=["PATCH"])
@admin_required
def update_event_submission(submission_id):
    submission = service.update_event_submission(submission_id, json_body())
    return jsonify({
        "success": True,
        "submission": normalize_event_submission(submission, detail=True),
        "message": "Submission updated successfully",
    })


@v1_bp.route("/events/submissions/<submission_id>", methods=["DELETE"])
@admin_required
def delete_event_submission(submission_id):
    service.delete_event_submission(submission_id)
    return jsonify({"success": True, "message": "Submission deleted successfully"})
