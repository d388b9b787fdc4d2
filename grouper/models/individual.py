"""Individual model."""

from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict


class Individual(BaseModel):
    """Represents one person to be placed in a group."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "Ada",
                "traits": {
                    "gender": "F",
                    "discipline": "engineering",
                    "seniority": "senior",
                    "client": "acme",
                    "team": "platform",
                },
            }
        },
    )

    name: str
    traits: Dict[str, str]

    def trait(self, trait_name: str) -> Optional[str]:
        """Get the value of a trait, or None when it is absent."""
        return self.traits.get(trait_name)

    def __str__(self) -> str:
        return f"{self.name} ({', '.join(self.traits.values())})"
