"""Documents and photos attached to a product."""

from dataclasses import dataclass
from enum import Enum


class FileType(str, Enum):
    RECEIPT = "receipt"
    PHOTO = "photo"


@dataclass(frozen=True)
class ProductFile:
    """Metadata for an uploaded file. Upload itself happens elsewhere."""

    product_id: str
    file_type: str
    file_name: str
    file_id: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.file_id,
            "product_id": self.product_id,
            "file_type": self.file_type,
            "file_name": self.file_name,
        }

    @classmethod
    def from_record(cls, data: dict) -> "ProductFile":
        return cls(
            file_id=str(data.get("id", "")),
            product_id=str(data["product_id"]),
            file_type=data.get("file_type") or "",
            file_name=data.get("file_name") or "",
        )
