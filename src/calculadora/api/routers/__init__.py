from calculadora.api.routers.calculos_router import calculos_router
from calculadora.api.routers.clientes_router import clientes_router
from calculadora.api.routers.usuarios_router import usuarios_router

__all__ = ["calculos_router", "clientes_router", "usuarios_router"]
