class ActionType:
    """Action kinds recorded in the activity log."""

    UPLOAD = "upload"
    DOWNLOAD = "download"
    QR_GENERATE = "qr_generate"
    SEARCH = "search"
    VIEW = "view"
    AI_PROCESSING = "ai_processing"
