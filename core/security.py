import os
from fastapi import Header, HTTPException


def require_api_key(authorization: str | None = Header(default=None)) -> str:
    api_key = os.getenv("API_KEY")
    if not api_key:
        raise HTTPException(status_code=500, detail="API_KEY não configurada no servidor.")

    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Authorization inválido. Use Bearer <API_KEY>.")

    token = authorization.split(" ", 1)[1].strip()
    if token != api_key:
        raise HTTPException(status_code=401, detail="API_KEY inválida.")

    return token
