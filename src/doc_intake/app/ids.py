"""Component identifiers shared by the layout and callbacks."""

URL = "url"
PAGE_CONTENT = "page-content"

STORE_INTAKE = "store-intake"
STORE_UNLOAD_GUARD = "store-unload-guard"
UNLOAD_GUARD_SINK = "unload-guard-sink"

CONFIRM_LEAVE = "confirm-leave"
BUTTON_BACK = "button-back"
BUTTON_PROCESS = "button-process"

UPLOAD_DROPZONE = "upload-dropzone"
UPLOAD_BROWSE = "upload-browse"
INTAKE_STATUS = "intake-status"
