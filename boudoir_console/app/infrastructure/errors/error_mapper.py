from boudoir_console.clients.boudoir_client_sdk.http_client import APIError


class ErrorMapper:
    """Turns API and transport failures into the notice shown to the user."""

    _KNOWN_CODES = {
        "INVALID_CREDENTIALS": ("Email ou mot de passe incorrect.", "Vérifiez vos identifiants."),
        "INVALID_TOKEN": ("Votre session a expiré.", "Reconnectez-vous pour continuer."),
        "USER_INACTIVE": ("Ce compte est suspendu.", "Contactez un administrateur."),
        "PERMISSION_DENIED": ("Vous n'avez pas les droits pour cette action.", "Contactez un administrateur."),
        "ARTICLE_NOT_FOUND": ("Cet article n'existe plus.", "Retournez à la liste des articles."),
        "ARTICLE_NOT_PENDING_MODERATION": ("Cet article a déjà été modéré.", "Actualisez la file de modération."),
        "ALREADY_FAVORITED": ("Article déjà dans vos favoris.", "Aucune action nécessaire."),
        "CANNOT_FOLLOW_SELF": ("Vous ne pouvez pas vous suivre vous-même.", "Choisissez un autre profil."),
        "VALIDATION_ERROR": ("Certains champs sont invalides.", "Corrigez les champs indiqués."),
        "DB_UNAVAILABLE": ("Le service est momentanément indisponible.", "Réessayez dans quelques instants."),
        "INTERNAL_ERROR": ("Une erreur inattendue est survenue.", "Réessayez dans quelques instants."),
        "TIMEOUT_ERROR": ("Le serveur met trop de temps à répondre.", "Vérifiez votre connexion et réessayez."),
        "NETWORK_ERROR": ("Impossible de joindre le serveur.", "Vérifiez votre connexion et réessayez."),
    }

    _STATUS_HINTS = {
        401: ("INVALID_TOKEN", "Votre session a expiré.", "Reconnectez-vous pour continuer."),
        403: ("PERMISSION_DENIED", "Vous n'avez pas les droits pour cette action.", "Contactez un administrateur."),
        500: ("INTERNAL_ERROR", "Une erreur inattendue est survenue.", "Réessayez dans quelques instants."),
    }

    @classmethod
    def to_payload(cls, error: Exception) -> dict:
        if isinstance(error, APIError):
            known = cls._KNOWN_CODES.get(error.code)
            status_code = error.status_code or -1
            mapped = cls._STATUS_HINTS.get(status_code)
            if mapped is None and status_code >= 500 and error.code != "DB_UNAVAILABLE":
                mapped = cls._STATUS_HINTS[500]
            if known is not None:
                code = error.code
                message, suggestion = known
            elif mapped is not None:
                code, message, suggestion = mapped
            else:
                code = error.code
                message, suggestion = error.message, "Contactez le support avec le trace_id."
            return {
                "code": code,
                "message": message,
                "details": error.details,
                "trace_id": error.trace_id,
                "suggestion": suggestion,
            }
        return {
            "code": "INTERNAL_ERROR",
            "message": str(error) or cls._KNOWN_CODES["INTERNAL_ERROR"][0],
            "details": None,
            "trace_id": None,
            "suggestion": cls._KNOWN_CODES["INTERNAL_ERROR"][1],
        }

    @classmethod
    def field_errors(cls, error: Exception) -> dict[str, str]:
        """Per-field messages from a ``VALIDATION_ERROR`` envelope."""
        if not isinstance(error, APIError) or error.code != "VALIDATION_ERROR" or not error.details:
            return {}
        result: dict[str, str] = {}
        for item in error.details.get("errors", []):
            field = item.get("field")
            if field:
                result.setdefault(field, item.get("message", ""))
        return result

    @classmethod
    def to_display_message(cls, error: Exception) -> str:
        payload = cls.to_payload(error)
        return f"[{payload['code']}] {payload['message']} (trace_id={payload['trace_id']})"
