# app/routes/users/router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import EmailStr

from app.repositories import UserRepository
from app.routes.utils.listing import get_store
from app.schemas.user import Availability, Staff, UserCreate
from app.store import DocumentStore

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/availability", response_model=Availability)
async def check_user_availability(
    email: EmailStr = Query(...),
    mobile: str = Query(..., min_length=7, max_length=20),
    store: DocumentStore = Depends(get_store)
):
    users = UserRepository(store)
    return Availability(email_taken=users.email_taken(email), mobile_taken=users.mobile_taken(mobile))


@router.post("/register", response_model=Staff, status_code=status.HTTP_201_CREATED)
async def register_user(user_in: UserCreate, store: DocumentStore = Depends(get_store)):
    users = UserRepository(store)
    if users.email_taken(user_in.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered"
        )
    if users.mobile_taken(user_in.mobile):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Mobile number already registered"
        )
    return users.register(user_in)


@router.get("/staff", response_model=List[Staff])
async def list_staff(
    branch: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store)
):
    return UserRepository(store).list_staff(branch)


@router.get("/staff/{staff_id}", response_model=Staff)
async def get_staff(staff_id: str, store: DocumentStore = Depends(get_store)):
    # NotFound is turned into a 404 by the registered handler
    return UserRepository(store).get_staff_details(staff_id)
