import os
import secrets
import string
import time
from flask import current_app
from werkzeug.utils import secure_filename
from agency_cms.domain.errors import InvalidUpload, UploadError
from agency_cms.domain.session import require_session

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'svg'}

_BASE36 = string.digits + string.ascii_lowercase

def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS

def generate_storage_key(filename):
    """
    Build a storage key of the form ``<epoch-ms>-<13 base36 chars>.<ext>``.

    The random suffix keeps two uploads within the same millisecond apart.
    """
    ext = secure_filename(filename).rsplit('.', 1)[1].lower()
    suffix = ''.join(secrets.choice(_BASE36) for _ in range(13))
    return f"{int(time.time() * 1000)}-{suffix}.{ext}"

def upload_folder():
    folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
    if not os.path.isabs(folder):
        folder = os.path.join(current_app.instance_path, folder)
    return folder

def public_url(key):
    base = current_app.config.get('MEDIA_PUBLIC_URL', '/media').rstrip('/')
    return f"{base}/{key}"

def upload_image(file, *, session):
    """
    Store one image in the media bucket and return its public URL.

    Nothing is removed again if a later step fails; orphaned objects are
    left in place.
    """
    require_session(session, "image upload")

    if file is None or not file.filename:
        raise InvalidUpload("No file selected")

    if not allowed_file(file.filename):
        raise InvalidUpload("File type not allowed")

    key = generate_storage_key(file.filename)
    folder = upload_folder()

    try:
        os.makedirs(folder, exist_ok=True)
        file.save(os.path.join(folder, key))
    except OSError as e:
        current_app.logger.error(f"Failed to store upload {key}: {e}")
        raise UploadError(f"Failed to store {file.filename}: {e}") from e

    current_app.logger.info(f"Stored upload {key}")
    return public_url(key)
