class AuthStore:
    def __init__(self) -> None:
        self.token: str | None = None
        self.user: dict | None = None

    def set_token(self, token: str, user: dict | None = None) -> None:
        self.token = token
        self.user = user

    def get_token(self) -> str | None:
        return self.token

    @property
    def role(self) -> str | None:
        return (self.user or {}).get("role")

    def clear(self) -> None:
        self.token = None
        self.user = None
