"""
Tests for the calculation service: client upsert, transactions, visibility.
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from calculadora.core.exceptions import InvalidInputError, NotFoundError
from calculadora.models import Calculo, Cliente
from conftest import dados_cliente


def _create(service, acting_user, cpf="12345678901", valor_locacao=1000.0, **cliente_fields):
    return service.create(
        valor_locacao=valor_locacao,
        valor_taxas=200.0,
        cliente=dados_cliente(cpf, **cliente_fields),
        acting_user=acting_user,
    )


class TestCreateCalculo:
    """Tests for CalculoService.create."""

    def test_create_persists_derived_values(self, calculo_service, user):
        calculo = _create(calculo_service, user)

        assert calculo.valor_inicial == 1200
        assert calculo.valor_original == 4800
        assert calculo.valor_com_desconto == 3600
        assert calculo.valor_corrigido == pytest.approx(3618.0)
        assert calculo.taxa_poupanca == 0.005
        assert calculo.usuario_id == user.id
        assert calculo.cliente.cpf == "12345678901"

    def test_create_with_custom_rate(self, calculo_service, user):
        calculo = calculo_service.create(
            valor_locacao=1000.0,
            valor_taxas=200.0,
            cliente=dados_cliente(),
            acting_user=user,
            taxa_poupanca=0.01,
        )
        assert calculo.taxa_poupanca == 0.01
        assert calculo.valor_corrigido == 3600 * (1 + 0.01)

    def test_new_cpf_creates_client(self, db, calculo_service, user):
        _create(calculo_service, user, cpf="11111111111")
        assert db.query(Cliente).filter(Cliente.cpf == "11111111111").count() == 1

    def test_existing_cpf_updates_contact_details(self, db, calculo_service, user):
        first = _create(calculo_service, user)
        second = _create(
            calculo_service,
            user,
            nome="Maria Souza Lima",
            telefone="11988887777",
            email="maria.lima@example.com",
        )

        assert first.cliente_id == second.cliente_id
        assert db.query(Cliente).count() == 1

        cliente = db.get(Cliente, first.cliente_id)
        assert cliente.nome == "Maria Souza Lima"
        assert cliente.telefone == "11988887777"
        assert cliente.email == "maria.lima@example.com"

    def test_upsert_with_identical_fields_is_idempotent(self, db, calculo_service, user):
        first = _create(calculo_service, user)
        cliente = db.get(Cliente, first.cliente_id)
        snapshot = (cliente.id, cliente.nome, cliente.telefone, cliente.email, cliente.updated_at)

        _create(calculo_service, user)

        db.expire_all()
        cliente = db.get(Cliente, first.cliente_id)
        assert db.query(Cliente).count() == 1
        assert (cliente.id, cliente.nome, cliente.telefone, cliente.email, cliente.updated_at) == snapshot

    def test_invalid_input_persists_nothing(self, db, calculo_service, user):
        """Test the client upsert is rolled back when the engine rejects inputs."""
        with pytest.raises(InvalidInputError):
            calculo_service.create(
                valor_locacao=-10.0,
                valor_taxas=200.0,
                cliente=dados_cliente("22222222222"),
                acting_user=user,
            )

        assert db.query(Cliente).filter(Cliente.cpf == "22222222222").count() == 0
        assert db.query(Calculo).count() == 0

    def test_failed_create_keeps_existing_client_unchanged(self, db, calculo_service, user):
        first = _create(calculo_service, user)

        with pytest.raises(InvalidInputError):
            calculo_service.create(
                valor_locacao=0.0,
                valor_taxas=200.0,
                cliente=dados_cliente(nome="Outro Nome"),
                acting_user=user,
            )

        db.expire_all()
        assert db.get(Cliente, first.cliente_id).nome == "Maria Souza"


class TestListCalculos:
    """Tests for listing and ownership restriction."""

    def test_user_only_sees_own_calculations(self, calculo_service, user, other_user):
        mine = _create(calculo_service, user, cpf="11111111111")
        _create(calculo_service, other_user, cpf="22222222222")

        calculos, total = calculo_service.list(user)

        assert total == 1
        assert [c.id for c in calculos] == [mine.id]

    def test_client_filter_cannot_widen_visibility(self, calculo_service, user, other_user):
        theirs = _create(calculo_service, other_user, cpf="22222222222")

        calculos, total = calculo_service.list(user, cliente_id=theirs.cliente_id)

        assert calculos == []
        assert total == 0

    def test_admin_sees_all_calculations(self, calculo_service, admin, user, other_user):
        _create(calculo_service, user, cpf="11111111111")
        _create(calculo_service, other_user, cpf="22222222222")

        _, total = calculo_service.list(admin)
        assert total == 2

    def test_admin_filter_by_client(self, calculo_service, admin, user, other_user):
        target = _create(calculo_service, user, cpf="11111111111")
        _create(calculo_service, other_user, cpf="22222222222")

        calculos, total = calculo_service.list(admin, cliente_id=target.cliente_id)
        assert total == 1
        assert calculos[0].id == target.id

    def test_newest_first_with_pagination(self, db, calculo_service, user):
        created = [_create(calculo_service, user, valor_locacao=100.0 * (i + 1)) for i in range(5)]
        base = datetime(2025, 1, 1, 12, 0, 0)
        for offset, calculo in enumerate(created):
            calculo.created_at = base + timedelta(minutes=offset)
        db.commit()

        page1, total = calculo_service.list(user, page=1, limit=2)
        page3, _ = calculo_service.list(user, page=3, limit=2)

        assert total == 5
        assert [c.id for c in page1] == [created[4].id, created[3].id]
        assert [c.id for c in page3] == [created[0].id]

    def test_ties_are_ordered_by_id(self, db, calculo_service, user):
        created = [_create(calculo_service, user) for _ in range(3)]
        same_time = datetime(2025, 1, 1, 12, 0, 0)
        for calculo in created:
            calculo.created_at = same_time
        db.commit()

        calculos, _ = calculo_service.list(user)
        assert [c.id for c in calculos] == sorted(c.id for c in created)


class TestGetAndDeleteCalculo:
    """Tests for fetch/delete by id."""

    def test_get_own_calculation(self, calculo_service, user):
        calculo = _create(calculo_service, user)
        fetched = calculo_service.get_by_id(calculo.id, user)
        assert fetched.id == calculo.id
        assert fetched.cliente.nome == "Maria Souza"

    def test_get_missing_calculation(self, calculo_service, user):
        with pytest.raises(NotFoundError):
            calculo_service.get_by_id(uuid4(), user)

    def test_get_other_users_calculation_is_not_found(self, calculo_service, user, other_user):
        theirs = _create(calculo_service, other_user)
        with pytest.raises(NotFoundError):
            calculo_service.get_by_id(theirs.id, user)

    def test_admin_gets_any_calculation(self, calculo_service, admin, user):
        calculo = _create(calculo_service, user)
        assert calculo_service.get_by_id(calculo.id, admin).id == calculo.id

    def test_delete_own_calculation(self, db, calculo_service, user):
        calculo = _create(calculo_service, user)
        calculo_id = calculo.id

        calculo_service.delete(calculo_id, user)

        assert db.get(Calculo, calculo_id) is None
        with pytest.raises(NotFoundError):
            calculo_service.delete(calculo_id, user)

    def test_delete_other_users_calculation_is_not_found(self, db, calculo_service, user, other_user):
        theirs = _create(calculo_service, other_user)

        with pytest.raises(NotFoundError):
            calculo_service.delete(theirs.id, user)

        assert db.get(Calculo, theirs.id) is not None

    def test_admin_deletes_any_calculation(self, db, calculo_service, admin, user):
        calculo = _create(calculo_service, user)
        calculo_id = calculo.id

        calculo_service.delete(calculo_id, admin)
        assert db.get(Calculo, calculo_id) is None

    def test_deleting_calculation_keeps_client(self, db, calculo_service, user):
        calculo = _create(calculo_service, user)
        cliente_id = calculo.cliente_id

        calculo_service.delete(calculo.id, user)
        assert db.get(Cliente, cliente_id) is not None


class TestConcurrentClientInsert:
    """Tests for the upsert when another request inserts the same CPF first."""

    def test_lost_insert_race_updates_winning_row(self, db, calculo_service, user, monkeypatch):
        winner = Cliente(
            nome="Maria Souza",
            telefone="11999999999",
            cpf="12345678901",
            email="maria@example.com",
        )
        db.add(winner)
        db.commit()
        winner_id = winner.id

        repo = calculo_service.clientes
        real_get_by_cpf = repo.get_by_cpf
        lookups = []

        def stale_first_lookup(cpf):
            # the first lookup ran before the competing insert committed
            lookups.append(cpf)
            if len(lookups) == 1:
                return None
            return real_get_by_cpf(cpf)

        monkeypatch.setattr(repo, "get_by_cpf", stale_first_lookup)

        calculo = _create(
            calculo_service,
            user,
            nome="Maria Souza Lima",
            telefone="11988887777",
            email="maria.lima@example.com",
        )

        assert len(lookups) == 2
        assert calculo.cliente_id == winner_id

        db.expire_all()
        clientes = db.query(Cliente).all()
        assert len(clientes) == 1
        assert clientes[0].nome == "Maria Souza Lima"
        assert clientes[0].telefone == "11988887777"
        assert clientes[0].email == "maria.lima@example.com"
        assert db.query(Calculo).filter(Calculo.cliente_id == winner_id).count() == 1
