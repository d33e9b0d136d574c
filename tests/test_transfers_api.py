from decimal import Decimal


async def _create(client, nombre, balance):
    resp = await client.post("/usuario", json={"nombre": nombre, "balance": balance})
    assert resp.status_code == 201
    return resp.json()["id"]


async def _balances(client):
    resp = await client.get("/usuarios")
    assert resp.status_code == 200
    return {u["id"]: u["balance"] for u in resp.json()}


async def test_post_transferencia_success(client):
    a = await _create(client, "Ana", 100)
    b = await _create(client, "Beto", 0)

    resp = await client.post("/transferencia", json={"emisor": a, "receptor": b, "monto": 40})

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Transferencia realizada con éxito"
    assert body["transferencia"]["emisor"] == a
    assert body["transferencia"]["receptor"] == b
    assert body["transferencia"]["monto"] == 40.0
    assert body["transferencia"]["fecha"]

    balances = await _balances(client)
    assert balances[a] == 60.0
    assert balances[b] == 40.0

    ledger = (await client.get("/transferencias")).json()
    assert len(ledger) == 1
    assert ledger[0]["emisor"] == "Ana"
    assert ledger[0]["receptor"] == "Beto"
    assert ledger[0]["monto"] == 40.0


async def test_post_transferencia_insufficient_funds(client):
    a = await _create(client, "Ana", 10)
    b = await _create(client, "Beto", 0)

    resp = await client.post("/transferencia", json={"emisor": a, "receptor": b, "monto": 50})

    assert resp.status_code == 400
    assert resp.json() == {"message": "La cuenta del emisor no tiene saldo suficiente"}
    assert await _balances(client) == {a: 10.0, b: 0.0}
    assert (await client.get("/transferencias")).json() == []


async def test_post_transferencia_unknown_sender(client):
    b = await _create(client, "Beto", 0)

    resp = await client.post("/transferencia", json={"emisor": 777, "receptor": b, "monto": 5})

    assert resp.status_code == 404
    assert resp.json() == {"message": "Usuario no encontrado"}
    assert await _balances(client) == {b: 0.0}


async def test_post_transferencia_same_user(client):
    a = await _create(client, "Ana", 10)

    resp = await client.post("/transferencia", json={"emisor": a, "receptor": a, "monto": 5})

    assert resp.status_code == 400
    assert await _balances(client) == {a: 10.0}


async def test_post_transferencia_rejects_non_positive_monto(client):
    a = await _create(client, "Ana", 10)
    b = await _create(client, "Beto", 0)

    resp = await client.post("/transferencia", json={"emisor": a, "receptor": b, "monto": 0})

    assert resp.status_code == 422


async def test_post_transferencia_internal_error_hides_detail(client, make_user, monkeypatch):
    from sqlalchemy.exc import SQLAlchemyError

    from transfer_bank.db import crud

    a = await make_user("Ana", 100)
    b = await make_user("Beto", 0)

    async def broken_append(db, sender_id, receiver_id, amount):
        raise SQLAlchemyError("secret driver detail")

    monkeypatch.setattr(crud, "append_transfer", broken_append)

    resp = await client.post("/transferencia", json={"emisor": a, "receptor": b, "monto": 10})

    assert resp.status_code == 500
    assert resp.json() == {"message": "Error interno del servidor."}
    assert "secret" not in resp.text
    assert await _balances(client) == {a: 100.0, b: 0.0}


async def test_get_transferencias_is_ordered_and_repeatable(client, service, make_user):
    a = await make_user("Ana", 100)
    b = await make_user("Beto", 100)
    await service.execute_transfer(a, b, Decimal("1"))
    await service.execute_transfer(b, a, Decimal("2"))
    await service.execute_transfer(a, b, Decimal("3"))

    first = (await client.get("/transferencias")).json()
    second = (await client.get("/transferencias")).json()

    assert first == second
    assert [t["monto"] for t in first] == [1.0, 2.0, 3.0]
    assert [(t["emisor"], t["receptor"]) for t in first] == [("Ana", "Beto"), ("Beto", "Ana"), ("Ana", "Beto")]


async def test_post_transferencia_rejects_sub_cent_monto(client):
    a = await _create(client, "Ana", 100)
    b = await _create(client, "Beto", 0)

    resp = await client.post("/transferencia", json={"emisor": a, "receptor": b, "monto": 0.001})

    assert resp.status_code == 422
    assert await _balances(client) == {a: 100.0, b: 0.0}
    assert (await client.get("/transferencias")).json() == []
