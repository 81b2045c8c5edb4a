# standsite/api/v1/company_profile.py
from flask import jsonify, request

from standsite.application import company_profile as service
from standsite.normalizers.company_profile import normalize_document
from standsite.utils.decorators import admin_required, is_admin_request
from standsite.utils.params import json_body
from . import v1_bp


def _with_url(document):
    return normalize_document(document, service.download_url(document))


def _form_flag(name):
    return request.form.get(name) == "true"


@v1_bp.route("/company-profile", methods=["GET"])
def get_company_profile():
    if request.args.get("current") == "true":
        document = service.get_current_document()
        return jsonify({"success": True, "data": _with_url(document)})

    # Everything beyond the current document is the admin view
    if not is_admin_request():
        return jsonify({"success": False, "error": "Insufficient permissions"}), 403

    document_id = request.args.get("id")
    if document_id:
        document = service.get_document(document_id)
        return jsonify({"success": True, "data": _with_url(document)})

    documents = service.list_documents()
    current = next((d for d in documents if d.is_current and d.is_active), None)

    return jsonify({
        "success": True,
        "data": {
            "documents": [normalize_document(d) for d in documents],
            "total": len(documents),
            "current": _with_url(current) if current else None,
        },
    })


@v1_bp.route("/company-profile", methods=["POST"])
@admin_required
def upload_company_profile():
    document = service.create_document(
        request.files.get("file"),
        title=request.form.get("title"),
        description=request.form.get("description"),
        version=request.form.get("version"),
        is_active=_form_flag("is_active"),
        is_current=_form_flag("is_current"),
    )
    return jsonify({
        "success": True,
        "data": _with_url(document),
        "message": "Document uploaded successfully",
    }), 201


@v1_bp.route("/company-profile", methods=["PUT"])
@admin_required
def update_company_profile():
    document_id = request.args.get("id")
    if not document_id:
        return jsonify({"success": False, "error": "Document ID is required"}), 400

    if request.args.get("action") == "set_current":
        document = service.set_current_document(document_id)
        return jsonify({
            "success": True,
            "data": normalize_document(document),
            "message": "Document set as current successfully",
        })

    document = service.update_document(document_id, json_body())
    return jsonify({
        "success": True,
        "data": normalize_document(document),
        "message": "Document updated successfully",
    })


@v1_bp.route("/company-profile", methods=["DELETE"])
@admin_required
def delete_company_profile():
    document_id = request.args.get("id")
    if not document_id:
        return jsonify({"success": False, "error": "Document ID is required"}), 400

    service.delete_document(document_id)
    return jsonify({"success": True, "message": "Document deleted successfully"})


@v1_bp.route("/company-profile/<document_id>/download", methods=["POST"])
def download_company_profile(document_id):
    document = service.record_download(document_id)
    return jsonify({
        "success": True,
        "downloadUrl": service.download_url(document),
        "download_count": document.download_count,
    })
