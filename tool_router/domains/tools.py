"""
Domain models describing invocable tools.

A ToolDescriptor is the unit stored in the searchable catalog; it is rebuilt
from the plugin registry on every indexing pass.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ParameterSpec(BaseModel):
    """One entry of a tool's parameter signature."""

    model_config = {"frozen": True}

    name: str = Field(..., description="Parameter name as accepted in the argument map")
    type: str = Field("str", description="Declared type name (str, int, date, ...)")
    description: str = Field("", description="Human readable description")
    required: bool = Field(True, description="Whether the argument must be supplied")
    default: Optional[Any] = Field(None, description="Default used when omitted")

    def to_text(self) -> str:
        """Render in the flat 'name (type, optional)' form used by the catalog."""
        qualifiers = [self.type]
        if not self.required:
            qualifiers.append("optional")
            if self.default is not None:
                qualifiers.append(f"default: {self.default}")
        text = f"{self.name} ({', '.join(qualifiers)})"
        if self.description:
            text += f" - {self.description}"
        return text


class ToolDescriptor(BaseModel):
    """Identity and metadata for one invocable tool."""

    model_config = {"frozen": True}

    id: str = Field(..., description="Opaque id, regenerated on every rebuild")
    name: str = Field(..., description="Invocation key, case-sensitive")
    plugin_id: str = Field(..., description="Owning plugin identifier")
    description: str = Field("", description="Free text used for full-text matching")
    invocation_path: str = Field("", description="Path used to reach the handler")
    http_method: str = Field("GET", description="HTTP verb of the invocation path")
    parameter_signature: List[ParameterSpec] = Field(default_factory=list)
    response_type_hint: str = Field("", description="Informational response shape")
    is_active: bool = Field(True, description="Inactive tools are never resolved")
    last_updated: datetime = Field(default_factory=utc_now)

    @field_validator("name", "plugin_id")
    @classmethod
    def not_empty(cls, v: str) -> str:
        """Validate that identity fields are not empty."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v

    @property
    def parameters_text(self) -> str:
        if not self.parameter_signature:
            return "None"
        return ", ".join(spec.to_text() for spec in self.parameter_signature)

    def to_document(self) -> Dict[str, Any]:
        """Convert to the catalog document schema."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "pluginId": self.plugin_id,
            "category": self.plugin_id,
            "invocationPath": self.invocation_path,
            "endpoint": self.invocation_path,
            "httpMethod": self.http_method,
            "parameters": self.parameters_text,
            "parameterSignature": [
                spec.model_dump() for spec in self.parameter_signature
            ],
            "responseType": self.response_type_hint,
            "lastUpdated": self.last_updated,
            "isActive": self.is_active,
        }

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "ToolDescriptor":
        """Build a descriptor from a catalog document.

        Documents written by older indexers only carry ``functionName``,
        ``category`` and ``endpoint``; those are accepted as fallbacks.
        """
        last_updated = document.get("lastUpdated")
        if isinstance(last_updated, str):
            last_updated = datetime.fromisoformat(last_updated)
        return cls(
            id=str(document.get("id") or document.get("_id") or ""),
            name=document.get("name") or document.get("functionName") or "",
            plugin_id=document.get("pluginId") or document.get("category") or "",
            description=document.get("description") or "",
            invocation_path=document.get("invocationPath")
            or document.get("endpoint")
            or "",
            http_method=document.get("httpMethod") or "GET",
            parameter_signature=[
                ParameterSpec(**spec)
                for spec in document.get("parameterSignature") or []
            ],
            response_type_hint=document.get("responseType") or "",
            is_active=bool(document.get("isActive", True)),
            last_updated=last_updated or utc_now(),
        )


class IndexingReport(BaseModel):
    """Outcome of one catalog rebuild."""

    indexed: int = Field(0, description="Number of descriptors uploaded")
    replaced: int = Field(0, description="Number of prior entries removed")
    started_at: datetime = Field(default_factory=utc_now)
    finished_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "indexed": self.indexed,
            "replaced": self.replaced,
            "startedAt": self.started_at.isoformat(),
            "finishedAt": self.finished_at.isoformat() if self.finished_at else None,
        }
