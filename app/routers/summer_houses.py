from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app import schemas
from app.crud import crud_summer_houses
from app.database import get_db

router = APIRouter(tags=["summer-houses"])


@router.get("/summer-houses", response_model=schemas.SummerHousesResponse)
def read_summer_houses(db: Session = Depends(get_db)):
    """Каталог домов по алфавиту"""
    return {"summer_houses": crud_summer_houses.get_summer_houses(db)}


@router.get("/results", response_model=schemas.ResultsResponse)
def read_results(db: Session = Depends(get_db)):
    """Дома с количеством голосов, от лидера к аутсайдеру"""
    return {"results": crud_summer_houses.get_summer_houses_with_vote_counts(db)}
