from dataclasses import dataclass, asdict, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from festival.utils.database_utils import object_id_to_str, without_empty

REQUIRED_FIELDS = ("name", "email", "phone", "age", "gender", "experience", "participation")


def _as_utc(value: Any) -> Any:
    """Attach UTC to naive datetimes read back from MongoDB, which stores UTC."""
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _isoformat(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


'''
Registration Model
One festival sign-up, stored as a document in the registrations collection.
Document keys are camelCase to match the public JSON contract.
 '''
@dataclass
class Registration:
    name: str
    email: str
    phone: str
    age: int
    gender: str
    experience: str
    participation: str  # competition | workshop | both (free text)
    registered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    payment_screenshot: Optional[str] = None
    payment_screenshot_path: Optional[str] = None
    id: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        """Document to insert; ``_id`` is left to the store."""
        return without_empty({
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "age": self.age,
            "gender": self.gender,
            "experience": self.experience,
            "participation": self.participation,
            "paymentScreenshot": self.payment_screenshot,
            "paymentScreenshotPath": self.payment_screenshot_path,
            "registeredAt": self.registered_at,
        })

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation with ``_id`` as a string and an ISO timestamp."""
        data = self.to_document()
        data["registeredAt"] = _isoformat(self.registered_at)
        return {"_id": self.id, **data}

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Registration":
        return cls(
            id=object_id_to_str(doc.get("_id")),
            name=doc.get("name"),
            email=doc.get("email"),
            phone=doc.get("phone"),
            age=doc.get("age"),
            gender=doc.get("gender"),
            experience=doc.get("experience"),
            participation=doc.get("participation"),
            registered_at=_as_utc(doc.get("registeredAt")),
            payment_screenshot=doc.get("paymentScreenshot"),
            payment_screenshot_path=doc.get("paymentScreenshotPath"),
        )


@dataclass
class RegistrationStats:
    total: int = 0
    male: int = 0
    female: int = 0
    beginners: int = 0
    competition: int = 0
    workshop: int = 0

    def to_dict(self) -> Dict: return asdict(self)
