from flask import request, jsonify
from flask_jwt_extended import jwt_required
from agency_cms.extensions import db
from agency_cms.models.contact_message import ContactMessage
from agency_cms.normalizers.message import normalize_message
from agency_cms.utils.decorators import roles_required
from agency_cms.utils.transaction import transactional
from . import v1_bp


@v1_bp.route("/messages", methods=["POST"])
def create_message():
    data = request.get_json(silent=True) or {}

    if not data.get("name") or not data.get("email") or not data.get("message"):
        return jsonify({"error": "Name, email and message are required"}), 400

    message = ContactMessage()
    message.name = data["name"]
    message.email = data["email"]
    message.subject = data.get("subject", "")
    message.message = data["message"]

    with transactional():
        db.session.add(message)

    return jsonify(normalize_message(message)), 201


@v1_bp.route("/messages", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_messages():
    messages = ContactMessage.query.order_by(ContactMessage.created_at.desc()).all()
    return jsonify([normalize_message(m) for m in messages])


@v1_bp.route("/messages/<message_id>/read", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def mark_message_read(message_id):
    message = ContactMessage.query.filter_by(id=message_id).first_or_404()

    data = request.get_json(silent=True) or {}
    with transactional():
        message.read = bool(data.get("read", True))

    return jsonify(normalize_message(message)), 200


@v1_bp.route("/messages/<message_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_message(message_id):
    message = ContactMessage.query.filter_by(id=message_id).first_or_404()

    with transactional():
        db.session.delete(message)

    return jsonify({"message": "Message deleted successfully"}), 200
