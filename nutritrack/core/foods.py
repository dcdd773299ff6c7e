"""Food Catalog - Static seed list of dishes for the meal planner.

Calorie values are rough per-serving estimates, not a validated source.
"""

from .models import MealItem


FOOD_CATALOG: tuple[MealItem, ...] = (
    MealItem(name="Phở Bò (Beef Pho)", cal=450),
    MealItem(name="Phở Gà (Chicken Pho)", cal=400),
    MealItem(name="Bánh Mì Đặc Biệt", cal=450),
    MealItem(name="Cơm Tấm Sườn Bì Chả", cal=650),
    MealItem(name="Bún Chả Hà Nội", cal=520),
    MealItem(name="Bún Bò Huế", cal=550),
    MealItem(name="Bún Riêu Cua", cal=450),
    MealItem(name="Cơm Gà Xối Mỡ", cal=700),
    MealItem(name="Gỏi Cuốn (2 pcs)", cal=160),
    MealItem(name="Cà Phê Sữa Đá", cal=180),
    MealItem(name="Trà Sữa Trân Châu", cal=450),
)


def search_foods(query: str, catalog: tuple[MealItem, ...] = FOOD_CATALOG) -> list[MealItem]:
    """Case-insensitive substring search on food names.

    Args:
        query: Search text; empty matches everything
        catalog: Foods to search

    Returns:
        Matching foods in catalog order
    """
    query_lower = query.lower()
    return [food for food in catalog if query_lower in food.name.lower()]
