# standsite/api/v1/contact.py
from flask import jsonify, request

from standsite.application import contact as service
from standsite.normalizers.contact import normalize_submission
from standsite.normalizers.pagination import normalize_pagination
from standsite.utils.decorators import admin_required
from standsite.utils.pagination import page_args
from standsite.utils.params import bool_arg, client_ip, json_body
from . import v1_bp


@v1_bp.route("/contact/submit", methods=["POST"])
def submit_contact():
    submission, _ = service.submit_contact_form(
        json_body(),
        ip_address=client_ip(),
        user_agent=request.headers.get("User-Agent"),
        referrer=request.headers.get("Referer"),
    )
    return jsonify({
        "success": True,
        "data": normalize_submission(submission),
    }), 201


@v1_bp.route("/contact/submissions", methods=["GET"])
@admin_required
def list_submissions():
    page, limit = page_args(default_limit=20)
    rows, total = service.list_submissions(
        page=page,
        limit=limit,
        status=request.args.get("status"),
        search=request.args.get("search"),
        is_spam=bool_arg("is_spam"),
        start_date=request.args.get("start_date"),
        end_date=request.args.get("end_date"),
    )

    data = normalize_pagination(
        rows,
        lambda s: normalize_submission(s, admin=True),
        key="data",
        page=page,
        limit=limit,
        total=total,
    )
    data["success"] = True
    return jsonify(data)


@v1_bp.route("/contact/submissions/stats", methods=["GET"])
@admin_required
def submission_stats():
    return jsonify({"success": True, "stats": service.submission_stats()})


@v1_bp.route("/contact/submissions/<submission_id>", methods=["GET"])
@admin_required
def get_submission(submission_id):
    submission = service.get_submission(submission_id)
    return jsonify({"success": True, "data": normalize_submission(submission, admin=True)})


@v1_bp.route("/contact/submissions/<submission_id>", methods=["PATCH"])
@admin_required
def update_submission(submission_id):
    submission = service.update_submission(submission_id, json_body())
    return jsonify({"success": True, "data": normalize_submission(submission, admin=True)})


@v1_bp.route("/contact/submissions/<submission_id>", methods=["DELETE"])
@admin_required
def delete_submission(submission_id):
    service.delete_submission(submission_id)
    return jsonify({"success": True, "message": "Submission deleted successfully"})


@v1_bp.route("/contact/submissions/<submission_id>/reply", methods=["POST"])
@admin_required
def reply_to_submission(submission_id):
    submission = service.reply_to_submission(submission_id, json_body())
    return jsonify({"success": True, "data": normalize_submission(submission, admin=True)})
