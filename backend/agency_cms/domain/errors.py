"""
Error taxonomy for the home-page content aggregate.

Every error carries a plain message only; the HTTP layer maps each class
to a status code in ``agency_cms.errors``.
"""


class HomeContentError(Exception):
    status_code = 500


class Unauthenticated(HomeContentError):
    status_code = 401


class NotFound(HomeContentError):
    status_code = 404


class UploadError(HomeContentError):
    status_code = 502


class ReadError(HomeContentError):
    status_code = 503


class WriteError(HomeContentError):
    status_code = 500


class DeleteError(HomeContentError):
    status_code = 409


class InvalidUpload(UploadError):
    status_code = 400
