# agency_cms/api/v1/orders.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from dateutil.parser import parse, ParserError
from agency_cms.extensions import db
from agency_cms.models.order import Order, ORDER_STATUSES
from agency_cms.normalizers.order import normalize_order
from agency_cms.normalizers.pagination import normalize_pagination
from agency_cms.utils.decorators import roles_required
from agency_cms.utils.order_ids import generate_order_id
from agency_cms.utils.transaction import transactional
from . import v1_bp

REQUIRED_ORDER_FIELDS = ("name", "email", "package_name", "package_price")
OPTIONAL_ORDER_FIELDS = ("phone", "company", "message", "budget", "timeline")


@v1_bp.route("/orders", methods=["POST"])
def create_order():
    data = request.get_json(silent=True) or {}

    missing = [field for field in REQUIRED_ORDER_FIELDS if not data.get(field)]
    if missing:
        return jsonify({"error": f"Missing fields: {', '.join(missing)}"}), 400

    order = Order()
    order.order_id = generate_order_id()
    order.status = "pending"
    for field in REQUIRED_ORDER_FIELDS + OPTIONAL_ORDER_FIELDS:
        if field in data:
            setattr(order, field, data[field])

    with transactional():
        db.session.add(order)

    return jsonify(normalize_order(order)), 201


@v1_bp.route("/orders", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_orders():
    status = request.args.get("status")
    since = request.args.get("since")
    page_num = request.args.get("page", 1, type=int)
    per_page = request.args.get("per_page", 20, type=int)

    query = Order.query
    if status:
        if status not in ORDER_STATUSES:
            return jsonify({"error": "Invalid status"}), 400
        query = query.filter_by(status=status)

    if since:
        try:
            query = query.filter(Order.created_at >= parse(since))
        except (ParserError, OverflowError):
            return jsonify({"error": "Invalid 'since' date"}), 400

    pagination = query.order_by(Order.created_at.desc()).paginate(
        page=page_num, per_page=per_page, error_out=False
    )

    return jsonify(
        normalize_pagination(
            pagination.items,
            normalize_order,
            page=page_num,
            per_page=per_page,
            total=pagination.total,
        )
    )


@v1_bp.route("/orders/<order_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def update_order_status(order_id):
    order = Order.query.filter_by(order_id=order_id).first_or_404()

    status = request.args.get("status")
    if status not in ORDER_STATUSES:
        return jsonify({"error": "Invalid status"}), 400

    with transactional():
        order.status = status

    return jsonify(normalize_order(order)), 200


@v1_bp.route("/orders/<order_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_order(order_id):
    order = Order.query.filter_by(order_id=order_id).first_or_404()

    with transactional():
        db.session.delete(order)

    return jsonify({"message": "Order deleted successfully"}), 200
