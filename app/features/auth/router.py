from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel
from app.config.database import get_db
from app.features.auth.service import authenticate_admin

router = APIRouter(tags=["Auth"])

class LoginRequest(BaseModel):
    username: str
    password: str

class AdminResponse(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True

class LoginResponse(BaseModel):
    message: str
    user: AdminResponse

@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    admin = authenticate_admin(db, credentials.username.strip(), credentials.password)
    return {"message": "Login OK", "user": admin}
