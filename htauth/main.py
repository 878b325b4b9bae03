import os
import logging
import uvicorn
import jwt
from datetime import datetime, timedelta
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Depends, Header

from .config import StoreConfig
from .errors import (
    InvalidCredentials,
    InvalidInput,
    UnsupportedMethod,
    UserAlreadyExists,
    UserNotFound,
)
from .store import AsyncCredentialStore, CredentialStore

load_dotenv()

logger = logging.getLogger(__name__)

# Security configuration
JWT_SECRET = os.getenv('JWT_SECRET', 'change-me-in-production-with-strong-secret')
JWT_ALGORITHM = 'HS256'
JWT_EXPIRATION_HOURS = int(os.getenv('JWT_EXPIRATION_HOURS', '24'))


def create_app(store: AsyncCredentialStore = None) -> FastAPI:
    app = FastAPI(title="htauth")
    app.state.store = store or AsyncCredentialStore(CredentialStore(StoreConfig.from_env()))

    def get_store() -> AsyncCredentialStore:
        return app.state.store

    def verify_token(authorization: str = Header(None)) -> str:
        """Verify JWT token from Authorization header and return the username."""
        if authorization is None:
            raise HTTPException(status_code=401, detail="missing authorization")
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise HTTPException(status_code=401, detail="invalid authorization header")
        token = parts[1]
        try:
            payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
            username = payload.get('sub')
            if not username:
                raise HTTPException(status_code=401, detail="invalid token payload")
            return username
        except jwt.ExpiredSignatureError:
            raise HTTPException(status_code=401, detail="token expired")
        except jwt.InvalidTokenError:
            raise HTTPException(status_code=401, detail="invalid token")

    @app.post("/api/login")
    async def login(username: str, password: str, store: AsyncCredentialStore = Depends(get_store)):
        """Authenticate against the credential file and return a JWT token."""
        if not await store.authenticate(username, password):
            raise HTTPException(status_code=401, detail="invalid username or password")
        return {
            "access_token": create_access_token(username),
            "token_type": "bearer",
            "expires_in": JWT_EXPIRATION_HOURS * 3600,
            "username": username
        }

    @app.get("/api/users")
    async def list_users(store: AsyncCredentialStore = Depends(get_store), _: str = Depends(verify_token)):
        users = await store.find_all(parse=True)
        # skip the blank entry a trailing newline leaves behind
        return {"users": [u.username for u in users if u.username]}

    @app.get("/api/users/{username}")
    async def get_user(username: str, store: AsyncCredentialStore = Depends(get_store), _: str = Depends(verify_token)):
        user = await store.find(username)
        if user is None:
            raise HTTPException(status_code=404, detail="user not found")
        return {"username": user.username}

    @app.post("/api/users", status_code=201)
    async def add_user(
        username: str,
        password: str,
        force: bool = False,
        store: AsyncCredentialStore = Depends(get_store),
        actor: str = Depends(verify_token),
    ):
        try:
            await store.add(username, password, force=force)
        except UserAlreadyExists:
            raise HTTPException(status_code=409, detail="user already exists")
        except (InvalidInput, UnsupportedMethod) as e:
            raise HTTPException(status_code=400, detail=str(e))
        logger.info("user %s added by %s", username, actor)
        return {"username": username}

    @app.delete("/api/users/{username}")
    async def remove_user(username: str, store: AsyncCredentialStore = Depends(get_store), actor: str = Depends(verify_token)):
        await store.remove(username)
        logger.info("user %s removed by %s", username, actor)
        return {"status": "removed"}

    @app.post("/api/users/{username}/password")
    async def change_password(
        username: str,
        password: str,
        current_password: str = None,
        force: bool = False,
        store: AsyncCredentialStore = Depends(get_store),
        actor: str = Depends(verify_token),
    ):
        try:
            await store.change_password(username, password, current_password, force=force)
        except UserNotFound:
            raise HTTPException(status_code=404, detail="user not found")
        except InvalidCredentials:
            raise HTTPException(status_code=403, detail="invalid credentials")
        except (InvalidInput, UnsupportedMethod) as e:
            raise HTTPException(status_code=400, detail=str(e))
        logger.info("password for %s changed by %s", username, actor)
        return {"status": "changed"}

    return app


def create_access_token(username: str) -> str:
    """Create a new JWT token with expiration."""
    expire = datetime.utcnow() + timedelta(hours=JWT_EXPIRATION_HOURS)
    payload = {'sub': username, 'exp': expire}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


app = create_app()


if __name__ == "__main__":
    uvicorn.run("htauth.main:app", host="0.0.0.0", port=8000, log_level="info")
