from fastapi.security import OAuth2PasswordBearer

# Tokens are minted by the external staff login service
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")
