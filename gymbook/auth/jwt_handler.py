import logging
from datetime import datetime, timezone, timedelta

from fastapi import HTTPException, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError

from gymbook.config import config

logger = logging.getLogger(__name__)

oauth2_scheme_access = OAuth2PasswordBearer(tokenUrl="api/users/login")


def verify_jwt_token(token: str = Depends(oauth2_scheme_access)):
    """
    Verify JWT access token for correctness and expiration time.
    Returns the principal {"id", "role"}.
    """
    try:
        payload = jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])

        exp = payload.get("exp")
        if exp is None:
            raise HTTPException(status_code=401, detail="Missing 'exp' field in token")

        token_exp_time = datetime.fromtimestamp(exp, tz=timezone.utc)
        if token_exp_time < datetime.now(tz=timezone.utc):
            raise HTTPException(status_code=401, detail="Token has expired")

        if "id" not in payload or "role" not in payload:
            raise HTTPException(status_code=401, detail="Invalid or expired token.")

        logger.debug(f"Token payload: {payload}")
        return {"id": payload["id"], "role": payload["role"]}

    except JWTError as e:
        logger.warning(f"JWT verification error: {str(e)}")
        raise HTTPException(status_code=401, detail="Invalid or expired token.")


def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    """
    Create a new JWT access token.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=config.JWT_ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)
    return encoded_jwt
