# agency_cms/api/v1/home.py
import json
from flask import request, jsonify
from agency_cms.application.home.delete_home_item import delete_home_item
from agency_cms.application.home.fetch_home_page import fetch_home_page
from agency_cms.application.home.save_home_page import save_home_page
from agency_cms.domain.edit_state import from_payload
from agency_cms.domain.session import current_session, require_session
from . import v1_bp

# URL segment -> collection
HOME_COLLECTIONS = {
    "hero-images": "hero_images",
    "stats": "stats",
    "services-preview": "services_preview",
}


def _read_payload():
    """
    Multipart requests carry the view model as a JSON ``data`` field next
    to the file parts; plain requests send it as the JSON body.
    """
    if "data" in request.form:
        try:
            return json.loads(request.form["data"])
        except ValueError:
            return None

    return request.get_json(silent=True)


@v1_bp.route("/home", methods=["GET"])
def get_home_page():
    return jsonify(fetch_home_page(session=current_session()))


@v1_bp.route("/home", methods=["PUT"])
def update_home_page():
    session = require_session(current_session(), "saving home page data")

    data = _read_payload()
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid payload"}), 400

    try:
        state = from_payload(data, request.files)
    except (KeyError, ValueError) as exc:
        return jsonify({"error": str(exc)}), 400

    return jsonify(save_home_page(state=state, session=session)), 200


@v1_bp.route("/home/<segment>/<item_id>", methods=["DELETE"])
def delete_home_page_item(segment, item_id):
    collection = HOME_COLLECTIONS.get(segment)
    if collection is None:
        return jsonify({"error": "Unknown collection"}), 404

    delete_home_item(
        collection=collection,
        item_id=item_id,
        session=current_session(),
    )

    return jsonify({"message": "Item deleted successfully"}), 200
