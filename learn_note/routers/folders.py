from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional

from learn_note.database import get_db
from learn_note.schemas.folder import FolderCreate, FolderUpdate, FolderOut
from learn_note.schemas.user import CurrentUser
from learn_note.services.normalizer import normalize_folder
from learn_note.services.ownership import folders
from learn_note.utils.security import get_current_user

router = APIRouter(prefix="/api/folders", tags=["Folders"])


@router.get("", response_model=List[FolderOut])
def list_folders(
    order_by: Optional[str] = Query(None, alias="orderBy"),
    order_direction: Optional[str] = Query(None, alias="orderDirection"),
    limit: Optional[int] = Query(None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the caller's folders, oldest first unless `orderBy` says otherwise."""
    rows = folders.list(db, user.id, order_by=order_by, direction=order_direction, limit=limit)
    return [normalize_folder(folder) for folder in rows]


@router.get("/{folder_id}", response_model=FolderOut)
def get_folder(folder_id: int, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return normalize_folder(folders.get(db, user.id, folder_id))


@router.post("", response_model=FolderOut, status_code=status.HTTP_201_CREATED)
def create_folder(body: FolderCreate, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    folder = folders.create(db, user.id, body.model_dump(exclude_unset=True))
    return normalize_folder(folder)


@router.put("/{folder_id}", response_model=FolderOut, status_code=status.HTTP_201_CREATED)
def rename_folder(
    folder_id: int,
    body: FolderUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    folder = folders.update(db, user.id, folder_id, body.model_dump(exclude_unset=True))
    return normalize_folder(folder)


@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_folder(folder_id: int, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Delete a folder. Its topics survive with their parent cleared."""
    folders.delete(db, user.id, folder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
