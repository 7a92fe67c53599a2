import sys
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add api path to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../"))

from app.models import Ingredient
from app.services.ingestion import IngestionService
from app.services.nutrition_service import NutritionClient
from app.settings import settings


def backfill_nutrition():
    print(f"Connecting to {settings.database_url}...")
    engine = create_engine(settings.database_url)
    Session = sessionmaker(bind=engine)
    session = Session()

    try:
        ingredients = session.query(Ingredient).filter(Ingredient.calories_per_100g == None).all()
        print(f"Found {len(ingredients)} ingredients without nutrition data.")

        service = IngestionService(session, nutrition=NutritionClient())
        updated = service.fill_missing_nutrition(ingredients)
        print(f"Backfill complete: {updated} updated.")
    finally:
        session.close()


if __name__ == "__main__":
    backfill_nutrition()
