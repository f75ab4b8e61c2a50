from flask import request, jsonify
from agency_cms.domain.session import current_session
from agency_cms.utils.media import upload_image
from . import v1_bp


@v1_bp.route("/images/upload", methods=["POST"])
def upload():
    session = current_session()

    url = upload_image(request.files.get("file"), session=session)

    return jsonify({"url": url}), 201
