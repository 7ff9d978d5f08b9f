# app/routes/branches/router.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.repositories import BranchRepository
from app.routes.utils.listing import get_store, not_found
from app.schemas.branch import Branch, BranchCreate, BranchUpdate
from app.store import DocumentStore

router = APIRouter(prefix="/branches", tags=["branches"])


@router.get("/", response_model=List[Branch])
async def list_branches(store: DocumentStore = Depends(get_store)):
    return BranchRepository(store).list_all()


@router.get("/code/{code}", response_model=Branch)
async def get_branch_by_code(code: str, store: DocumentStore = Depends(get_store)):
    branch = BranchRepository(store).get_by_code(code)
    if branch is None:
        raise not_found("Branch")
    return branch


@router.get("/{branch_id}", response_model=Branch)
async def get_branch(branch_id: str, store: DocumentStore = Depends(get_store)):
    branch = BranchRepository(store).get_or_none(branch_id)
    if branch is None:
        raise not_found("Branch")
    return branch


@router.post("/", response_model=Branch, status_code=status.HTTP_201_CREATED)
async def create_branch(branch_in: BranchCreate, store: DocumentStore = Depends(get_store)):
    branches = BranchRepository(store)
    if branches.get_by_code(branch_in.code):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Branch code {branch_in.code.upper()} already exists"
        )
    return branches.create(branch_in)


@router.put("/{branch_id}", response_model=Branch)
async def update_branch(
    branch_id: str,
    branch_update: BranchUpdate,
    store: DocumentStore = Depends(get_store)
):
    branches = BranchRepository(store)
    branches.update_branch(branch_id, branch_update)
    return branches.get(branch_id)


@router.delete("/{branch_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_branch(branch_id: str, store: DocumentStore = Depends(get_store)):
    BranchRepository(store).delete(branch_id)
