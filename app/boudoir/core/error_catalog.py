from dataclasses import dataclass
from fastapi import status


@dataclass(frozen=True)
class ErrorDefinition:
    code: str
    message: str
    status_code: int


class ErrorCatalog:
    INVALID_TOKEN = ErrorDefinition("INVALID_TOKEN", "Invalid token", status.HTTP_401_UNAUTHORIZED)
    INVALID_CREDENTIALS = ErrorDefinition(
        "INVALID_CREDENTIALS",
        "Invalid credentials",
        status.HTTP_401_UNAUTHORIZED,
    )
    USER_INACTIVE = ErrorDefinition(
        "USER_INACTIVE",
        "User is inactive or suspended",
        status.HTTP_403_FORBIDDEN,
    )
    PERMISSION_DENIED = ErrorDefinition(
        "PERMISSION_DENIED",
        "Permission denied",
        status.HTTP_403_FORBIDDEN,
    )
    EMAIL_ALREADY_REGISTERED = ErrorDefinition(
        "EMAIL_ALREADY_REGISTERED",
        "An account already exists for this email",
        status.HTTP_409_CONFLICT,
    )
    CURRENT_PASSWORD_INVALID = ErrorDefinition(
        "CURRENT_PASSWORD_INVALID",
        "Current password invalid",
        status.HTTP_400_BAD_REQUEST,
    )
    PASSWORD_TOO_SHORT = ErrorDefinition(
        "PASSWORD_TOO_SHORT",
        "Password too short",
        status.HTTP_400_BAD_REQUEST,
    )
    PASSWORD_MUST_DIFFER = ErrorDefinition(
        "PASSWORD_MUST_DIFFER",
        "New password must differ from current password",
        status.HTTP_400_BAD_REQUEST,
    )
    PASSWORD_COMPLEXITY = ErrorDefinition(
        "PASSWORD_COMPLEXITY",
        "Password must include letters and numbers",
        status.HTTP_400_BAD_REQUEST,
    )
    USER_NOT_FOUND = ErrorDefinition("USER_NOT_FOUND", "User not found", status.HTTP_404_NOT_FOUND)
    ARTICLE_NOT_FOUND = ErrorDefinition("ARTICLE_NOT_FOUND", "Article not found", status.HTTP_404_NOT_FOUND)
    CATEGORY_NOT_FOUND = ErrorDefinition("CATEGORY_NOT_FOUND", "Category not found", status.HTTP_404_NOT_FOUND)
    NOTIFICATION_NOT_FOUND = ErrorDefinition(
        "NOTIFICATION_NOT_FOUND",
        "Notification not found",
        status.HTTP_404_NOT_FOUND,
    )
    CATEGORY_ALREADY_EXISTS = ErrorDefinition(
        "CATEGORY_ALREADY_EXISTS",
        "A category with this name or slug already exists",
        status.HTTP_409_CONFLICT,
    )
    ARTICLE_NOT_OWNED = ErrorDefinition(
        "ARTICLE_NOT_OWNED",
        "Article belongs to another seller",
        status.HTTP_403_FORBIDDEN,
    )
    ARTICLE_NOT_PENDING_MODERATION = ErrorDefinition(
        "ARTICLE_NOT_PENDING_MODERATION",
        "Article is not awaiting moderation",
        status.HTTP_400_BAD_REQUEST,
    )
    ARTICLE_NOT_AWAITING_PAYMENT = ErrorDefinition(
        "ARTICLE_NOT_AWAITING_PAYMENT",
        "Article is not awaiting payment",
        status.HTTP_400_BAD_REQUEST,
    )
    ALREADY_FAVORITED = ErrorDefinition(
        "ALREADY_FAVORITED",
        "Article already in favorites",
        status.HTTP_400_BAD_REQUEST,
    )
    FAVORITE_NOT_FOUND = ErrorDefinition(
        "FAVORITE_NOT_FOUND",
        "Article not found in favorites",
        status.HTTP_404_NOT_FOUND,
    )
    CANNOT_FOLLOW_SELF = ErrorDefinition(
        "CANNOT_FOLLOW_SELF",
        "You cannot follow yourself",
        status.HTTP_400_BAD_REQUEST,
    )
    ALREADY_FOLLOWING = ErrorDefinition(
        "ALREADY_FOLLOWING",
        "You already follow this user",
        status.HTTP_400_BAD_REQUEST,
    )
    NOT_FOLLOWING = ErrorDefinition(
        "NOT_FOLLOWING",
        "You do not follow this user",
        status.HTTP_400_BAD_REQUEST,
    )
    SELLER_NOT_FOUND = ErrorDefinition("SELLER_NOT_FOUND", "Seller not found", status.HTTP_404_NOT_FOUND)
    PHONE_ALREADY_USED = ErrorDefinition(
        "PHONE_ALREADY_USED",
        "This phone number is already used by another account",
        status.HTTP_409_CONFLICT,
    )
    REPORT_NOT_FOUND = ErrorDefinition("REPORT_NOT_FOUND", "Report not found", status.HTTP_404_NOT_FOUND)
    REPORT_TARGET_REQUIRED = ErrorDefinition(
        "REPORT_TARGET_REQUIRED",
        "A report must name the article or the user it concerns",
        status.HTTP_400_BAD_REQUEST,
    )
    CANNOT_REPORT_SELF = ErrorDefinition(
        "CANNOT_REPORT_SELF",
        "You cannot report yourself or your own articles",
        status.HTTP_400_BAD_REQUEST,
    )
    ALREADY_REPORTED = ErrorDefinition(
        "ALREADY_REPORTED",
        "You already reported this content",
        status.HTTP_409_CONFLICT,
    )
    DB_UNAVAILABLE = ErrorDefinition(
        "DB_UNAVAILABLE",
        "Service temporarily unavailable, please try again",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    VALIDATION_ERROR = ErrorDefinition(
        "VALIDATION_ERROR",
        "Validation error",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    INTERNAL_ERROR = ErrorDefinition(
        "INTERNAL_ERROR",
        "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class AppError(Exception):
    def __init__(self, error: ErrorDefinition, details: object | None = None):
        self.error = error
        self.details = details
        super().__init__(error.message)
