"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los registros que producen los parsers (resultados de subida, pedidos)
  comparten una única forma, independiente del formato de origen.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class TeapplixCredentials(BaseModel):
    """Identidad de la cuenta Teapplix.

    Por qué existe:
    - El Core la usa solo para atribuir logs/errores a una cuenta.
    - Usuario/contraseña viven aquí porque el endpoint de export los espera en
      la query; nunca se usan para firmar peticiones.
    """

    model_config = ConfigDict(frozen=True)

    account_name: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Nombre de la cuenta Teapplix (aparece en la URL y en los logs).",
    )
    user_name: str | None = Field(
        default=None,
        description="Usuario API para descargar exports.",
    )
    password: str | None = Field(
        default=None,
        repr=False,
        description="Contraseña API para descargar exports.",
    )


class ServiceRequest(BaseModel):
    """Descriptor de una petición saliente (todavía no enviada).

    Variantes:
    - GET: solo URL.
    - POST: URL + content-type multipart con boundary, keep-alive y la
      identidad por defecto del transporte.
    """

    model_config = ConfigDict(frozen=True)

    method: Literal["GET", "POST"]
    url: str = Field(..., min_length=1)
    content_type: str | None = None
    keep_alive: bool = False
    use_default_credentials: bool = False
    content: bytes | None = Field(default=None, repr=False)

    def with_content(self, content: bytes) -> ServiceRequest:
        return self.model_copy(update={"content": content})

    @property
    def headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.content_type:
            headers["Content-Type"] = self.content_type
        if self.keep_alive:
            headers["Connection"] = "keep-alive"
        return headers


class TeapplixInventoryUploadResponse(BaseModel):
    """Resultado de una unidad de inventario subida."""

    model_config = ConfigDict(extra="ignore")

    sku: str = Field(
        ...,
        min_length=1,
        description="SKU/ItemName al que se refiere el resultado.",
    )
    status: str = Field(
        ...,
        min_length=1,
        description="Estado devuelto por Teapplix (p.ej. 'OK', 'Error').",
    )
    message: str | None = Field(
        default=None,
        description="Mensaje asociado (normalmente solo en errores).",
    )
    quantity: int | None = Field(
        default=None,
        description="Cantidad aplicada, si la respuesta la incluye.",
    )

    @property
    def succeeded(self) -> bool:
        return self.status.strip().lower() in {"ok", "success", "updated"}


class TeapplixOrderItem(BaseModel):
    sku: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0)
    description: str | None = None
    subtotal: Decimal | None = None


class TeapplixOrder(BaseModel):
    """Un pedido exportado por Teapplix.

    Por qué agrupar líneas:
    - El export trae una fila por línea de pedido; aquí se normaliza a un
      pedido con N items.
    """

    txn_id: str = Field(
        ...,
        min_length=1,
        description="Identificador de transacción (TxnId).",
    )
    order_date: date = Field(..., description="Fecha del pedido (columna Date).")
    payment_status: str | None = None
    currency: str | None = None
    total: Decimal | None = None
    shipping: Decimal | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    items: list[TeapplixOrderItem] = Field(default_factory=list)

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str | None) -> str | None:
        return value.upper() if value else value
