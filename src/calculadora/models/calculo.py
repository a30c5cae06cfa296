from sqlalchemy import Column, Float, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from calculadora.core.database import Base
from calculadora.models.base import BaseModelMixin


class Calculo(Base, BaseModelMixin):
    """
    A deposit calculation.

    Derived values (valor_inicial .. valor_corrigido) are always produced by
    the calculation engine. Removing the client removes its calculations;
    removing the creating user only clears usuario_id.
    """

    __tablename__ = "calculos"

    valor_locacao = Column(Float, nullable=False)
    valor_taxas = Column(Float, nullable=False)
    valor_inicial = Column(Float, nullable=False)
    valor_original = Column(Float, nullable=False)
    valor_com_desconto = Column(Float, nullable=False)
    valor_corrigido = Column(Float, nullable=False)
    taxa_poupanca = Column(Float, nullable=False, default=0.005)

    cliente_id = Column(
        Uuid(as_uuid=True), ForeignKey("clientes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    usuario_id = Column(
        Uuid(as_uuid=True), ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True, index=True
    )

    cliente = relationship("Cliente", back_populates="calculos")
    usuario = relationship("Usuario", back_populates="calculos")

    __table_args__ = (
        Index("idx_calculos_usuario_created", "usuario_id", "created_at"),
    )
