"""
User endpoints.

Public: registro, login. Authenticated: perfil. Admin only: list, create,
update and delete users.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from calculadora.application.authorization import AuthenticatedUser
from calculadora.application.services import UsuarioService
from calculadora.schemas import (
    AuthResponse,
    Envelope,
    LoginRequest,
    UsuarioAdminCreate,
    UsuarioAdminUpdate,
    UsuarioRegister,
    UsuarioResponse,
)
from calculadora.web.deps import get_current_user, get_usuario_service, require_admin

usuarios_router = APIRouter(prefix="/usuarios", tags=["Usuários"])


@usuarios_router.post(
    "/registro",
    response_model=Envelope[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    dados: UsuarioRegister,
    service: UsuarioService = Depends(get_usuario_service),
):
    usuario, token = service.register(dados.nome, dados.email, dados.senha)
    return Envelope(
        data=AuthResponse(usuario=UsuarioResponse.model_validate(usuario), token=token),
        message="user created",
    )


@usuarios_router.post("/login", response_model=Envelope[AuthResponse])
def login(
    dados: LoginRequest,
    service: UsuarioService = Depends(get_usuario_service),
):
    usuario, token = service.login(dados.email, dados.senha)
    return Envelope(
        data=AuthResponse(usuario=UsuarioResponse.model_validate(usuario), token=token),
        message="login successful",
    )


@usuarios_router.get("/perfil", response_model=Envelope[UsuarioResponse])
def profile(user: AuthenticatedUser = Depends(get_current_user)):
    return Envelope(data=UsuarioResponse.model_validate(user))


@usuarios_router.get("", response_model=Envelope[list[UsuarioResponse]])
def list_usuarios(
    admin: AuthenticatedUser = Depends(require_admin),
    service: UsuarioService = Depends(get_usuario_service),
):
    return Envelope(data=[UsuarioResponse.model_validate(u) for u in service.list_users()])


@usuarios_router.post(
    "",
    response_model=Envelope[UsuarioResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_usuario(
    dados: UsuarioAdminCreate,
    admin: AuthenticatedUser = Depends(require_admin),
    service: UsuarioService = Depends(get_usuario_service),
):
    usuario = service.create_user(dados.nome, dados.email, dados.senha, dados.role)
    return Envelope(data=UsuarioResponse.model_validate(usuario), message="user created")


@usuarios_router.put("/{usuario_id}", response_model=Envelope[UsuarioResponse])
def update_usuario(
    usuario_id: UUID,
    dados: UsuarioAdminUpdate,
    admin: AuthenticatedUser = Depends(require_admin),
    service: UsuarioService = Depends(get_usuario_service),
):
    usuario = service.update_user(
        usuario_id,
        nome=dados.nome,
        email=dados.email,
        role=dados.role,
        senha=dados.senha,
    )
    return Envelope(data=UsuarioResponse.model_validate(usuario), message="user updated")


@usuarios_router.delete("/{usuario_id}", response_model=Envelope[None])
def delete_usuario(
    usuario_id: UUID,
    admin: AuthenticatedUser = Depends(require_admin),
    service: UsuarioService = Depends(get_usuario_service),
):
    service.delete_user(usuario_id, admin)
    return Envelope(message="user deleted")
