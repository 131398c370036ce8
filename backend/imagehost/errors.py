"""Domain errors and the messages they expose over HTTP.

``str(exc)`` holds the internal detail and is only logged. ``public_message``
is what the caller sees.
"""


class ImageHostError(Exception):
    """Base class for errors translated to HTTP responses at the request boundary."""

    status_code = 500
    public_message = "Internal server error."

    def __init__(self, detail: str = "", public_message: str | None = None):
        super().__init__(detail or self.public_message)
        if public_message is not None:
            self.public_message = public_message


class ConnectivityError(ImageHostError):
    """The metadata store could not be reached."""

    public_message = "Error in uploading file(s)."


class DuplicateFileError(ImageHostError):
    """A file with the same name is already stored."""

    def __init__(self, name: str):
        self.name = name
        message = f"File with name {name} already exists."
        super().__init__(message, public_message=message)


class MalformedRequestError(ImageHostError):
    status_code = 400
    public_message = "An error occurred while consuming the files."


class PayloadTooLargeError(ImageHostError):
    status_code = 413
    public_message = "Uploaded content exceeds the size limit."


class PersistenceError(ImageHostError):
    """Writing to the metadata store or the storage directory failed."""

    public_message = "Error in uploading file(s)."


class RenderError(ImageHostError):
    public_message = "Error rendering page."
