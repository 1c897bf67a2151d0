# invoicething/api/clients.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from invoicething.api.deps import get_current_user
from invoicething.db.engine import get_engine
from invoicething.models.clients import ClientIn, ClientOut, ClientPatch
from invoicething.models.invoices import InvoiceOut
from invoicething.repositories import clients as repo
from invoicething.repositories.invoices import list_invoices

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("/", response_model=List[ClientOut])
def list_clients(current_user: dict = Depends(get_current_user)) -> List[ClientOut]:
    """
    Return the acting user's clients, ordered by name.
    """
    engine = get_engine()

    with engine.connect() as conn:
        rows = repo.list_clients(conn, current_user["id"])

    return [ClientOut.model_validate(row) for row in rows]


@router.post("/", response_model=ClientOut, status_code=201)
def create_client(
    payload: ClientIn,
    current_user: dict = Depends(get_current_user),
) -> ClientOut:
    engine = get_engine()

    with engine.begin() as conn:
        client_id = repo.create_client(conn, current_user["id"], payload.model_dump())
        row = repo.get_client(conn, current_user["id"], client_id)

    logger.info("Created client %s for user %s", client_id, current_user["id"])
    return ClientOut.model_validate(row)


@router.get("/{client_id}", response_model=ClientOut)
def get_client(
    client_id: int,
    current_user: dict = Depends(get_current_user),
) -> ClientOut:
    engine = get_engine()

    with engine.connect() as conn:
        row = repo.get_client(conn, current_user["id"], client_id)

    if row is None:
        raise HTTPException(status_code=404, detail="Client not found")

    return ClientOut.model_validate(row)


@router.patch("/{client_id}", response_model=ClientOut)
def update_client(
    client_id: int,
    payload: ClientPatch,
    current_user: dict = Depends(get_current_user),
) -> ClientOut:
    """
    Update only the fields present in the request body.
    """
    updates = payload.model_dump(exclude_unset=True)
    if updates.get("name", "") is None:
        raise HTTPException(status_code=422, detail="name cannot be null")

    engine = get_engine()

    with engine.begin() as conn:
        updated = repo.update_client(conn, current_user["id"], client_id, updates)
        row = repo.get_client(conn, current_user["id"], client_id) if updated else None

    if row is None:
        raise HTTPException(status_code=404, detail="Client not found")

    logger.info("Updated client %s for user %s", client_id, current_user["id"])
    return ClientOut.model_validate(row)


@router.delete("/{client_id}", status_code=204)
def delete_client(
    client_id: int,
    current_user: dict = Depends(get_current_user),
) -> Response:
    engine = get_engine()

    with engine.begin() as conn:
        if repo.get_client(conn, current_user["id"], client_id) is None:
            raise HTTPException(status_code=404, detail="Client not found")

        n_invoices = repo.count_client_invoices(conn, client_id)
        if n_invoices:
            raise HTTPException(
                status_code=409,
                detail=f"Client still has {n_invoices} invoice(s)",
            )

        repo.delete_client(conn, current_user["id"], client_id)

    logger.info("Deleted client %s for user %s", client_id, current_user["id"])
    return Response(status_code=204)


@router.get("/{client_id}/invoices", response_model=List[InvoiceOut])
def list_client_invoices(
    client_id: int,
    current_user: dict = Depends(get_current_user),
) -> List[InvoiceOut]:
    engine = get_engine()

    with engine.connect() as conn:
        if repo.get_client(conn, current_user["id"], client_id) is None:
            raise HTTPException(status_code=404, detail="Client not found")
        rows = list_invoices(conn, current_user["id"], client_id=client_id)

    return [InvoiceOut.model_validate(row) for row in rows]
