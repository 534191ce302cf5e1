"""Definiciones de modelos de dominio para usuarios."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    VEEDOR = "VEEDOR"


ROLE_LABELS = {
    UserRole.ADMIN: "Administrador",
    UserRole.VEEDOR: "Veedor",
}


@dataclass(frozen=True, slots=True)
class User:
    """Usuario del sistema tal como lo devuelve el backend.

    La contraseña nunca viaja de vuelta: sólo existe en los DTO de alta y
    edición.
    """

    id: str
    nombre: str
    email: str
    rol: UserRole = UserRole.VEEDOR
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.rol is UserRole.ADMIN

    @classmethod
    def from_dict(cls, datos: dict[str, Any]) -> "User":
        return cls(
            id=str(datos["id"]),
            nombre=datos.get("nombre") or "",
            email=datos.get("email") or "",
            rol=UserRole(datos.get("rol") or UserRole.VEEDOR.value),
            created_at=datos.get("createdAt"),
            updated_at=datos.get("updatedAt"),
        )

    def to_dict(self) -> dict[str, Any]:
        datos: dict[str, Any] = {
            "id": self.id,
            "nombre": self.nombre,
            "email": self.email,
            "rol": self.rol.value,
        }
        if self.created_at:
            datos["createdAt"] = self.created_at
        if self.updated_at:
            datos["updatedAt"] = self.updated_at
        return datos


__all__ = ["ROLE_LABELS", "User", "UserRole"]
