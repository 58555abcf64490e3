import json
from dataclasses import dataclass, asdict
from pathlib import Path

DEFAULT_AVATAR = "https://randomuser.me/api/portraits/lego/1.jpg"


@dataclass
class Session:
    """
    État d'authentification côté client, passé explicitement au client API.
    Vidé à la déconnexion et à toute réponse 401.
    """
    token: str | None = None
    username: str | None = None
    avatar: str = DEFAULT_AVATAR
    is_admin: bool = False

    @property
    def authenticated(self) -> bool:
        return bool(self.token)

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def remember(self, envelope: dict) -> None:
        """Mémorise token + champs d'affichage depuis une enveloppe d'authentification."""
        if not envelope.get("success"):
            return
        if envelope.get("token"):
            self.token = envelope["token"]
        self.update_identity(envelope.get("data") or {})

    def update_identity(self, identity: dict) -> None:
        if "username" in identity:
            self.username = identity["username"]
        if identity.get("avatar"):
            self.avatar = identity["avatar"]
        if "isAdmin" in identity:
            self.is_admin = bool(identity["isAdmin"])

    def clear(self) -> None:
        self.token = None
        self.username = None
        self.avatar = DEFAULT_AVATAR
        self.is_admin = False

    # --- persistance locale (fichier JSON) ---
    def save(self, path) -> None:
        Path(path).write_text(json.dumps(asdict(self)), encoding="utf-8")

    @classmethod
    def load(cls, path) -> "Session":
        p = Path(path)
        if not p.exists():
            return cls()
        raw = json.loads(p.read_text(encoding="utf-8"))
        return cls(**{k: v for k, v in raw.items() if k in cls.__dataclass_fields__})
