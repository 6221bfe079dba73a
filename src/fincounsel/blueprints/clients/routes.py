"""Client profile routes."""

from __future__ import annotations

from typing import Iterable

from flask import jsonify, request
from pydantic import ValidationError

from ...models.client import ChildDependent, Client, age_on
from ..common import client_repository, isoformat, not_found, validation_error_response
from . import bp
from .forms import ClientCreate, ClientUpdate


def serialize_client(client: Client, children: Iterable[ChildDependent] = ()) -> dict:
    data = client.model_dump(mode="json")
    data["full_name"] = client.full_name
    data["age"] = age_on(client.date_of_birth)
    data["children"] = [
        {
            "id": child.id,
            "name": child.name,
            "date_of_birth": isoformat(child.date_of_birth),
            "age": age_on(child.date_of_birth),
        }
        for child in children
    ]
    return data


@bp.get("/")
def list_clients():
    """List clients, optionally filtered with ``?q=``."""

    repo = client_repository()
    term = request.args.get("q", "").strip()
    clients = repo.search(term) if term else repo.list_all()
    return jsonify([serialize_client(client) for client in clients])


@bp.post("/")
def create_client():
    try:
        payload = ClientCreate.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        return validation_error_response(exc)

    repo = client_repository()
    client = repo.create(payload.to_model(), children=payload.child_models() or [])
    return jsonify(serialize_client(client, repo.list_children(client.id))), 201


@bp.get("/<int:client_id>")
def get_client(client_id: int):
    repo = client_repository()
    client = repo.get_by_id(client_id)
    if client is None:
        return not_found("client", client_id)
    return jsonify(serialize_client(client, repo.list_children(client_id)))


@bp.put("/<int:client_id>")
def update_client(client_id: int):
    try:
        payload = ClientUpdate.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        return validation_error_response(exc)

    repo = client_repository()
    client = repo.update(client_id, payload.changes())
    if client is None:
        return not_found("client", client_id)

    children = payload.child_models()
    if children is not None:
        repo.replace_children(client_id, children)
    return jsonify(serialize_client(client, repo.list_children(client_id)))


@bp.delete("/<int:client_id>")
def delete_client(client_id: int):
    if not client_repository().delete(client_id):
        return not_found("client", client_id)
    return "", 204
