"""Fixed SQL used outside the generated-query path."""

COLUMNS_QUERY = """
SELECT
  c.table_name,
  c.column_name
FROM information_schema.columns AS c
WHERE c.table_schema = %(schema)s
  AND c.table_name = ANY(%(tables)s)
ORDER BY c.table_name, c.ordinal_position
"""

RANGE_STATS_QUERY = """
SELECT
  COUNT(*) AS days_logged,
  ROUND(AVG(calories)) AS avg_calories,
  ROUND(AVG(protein_g)) AS avg_protein,
  ROUND(AVG(carbs_g)) AS avg_carbs,
  ROUND(AVG(fat_g)) AS avg_fat
FROM daily_nutrition
WHERE date >= %(start)s AND date <= %(end)s
"""

RECENT_FOODS_QUERY = """
SELECT date, meal, food_name, calories
FROM food_entries
WHERE date >= %(start)s AND date <= %(end)s
ORDER BY date DESC, meal
LIMIT 200
"""

UNIQUE_FOODS_QUERY = """
SELECT DISTINCT food_name
FROM food_entries
WHERE date >= %(start)s AND date <= %(end)s
ORDER BY food_name
LIMIT 200
"""

DAILY_NUTRITION_QUERY = """
SELECT date, calories, protein_g, carbs_g, fat_g, fiber_g, sugar_g, sodium_mg
FROM daily_nutrition
ORDER BY date ASC
"""

DAILY_NUTRITION_RANGE_QUERY = """
SELECT date, calories, protein_g, carbs_g, fat_g, fiber_g, sugar_g, sodium_mg
FROM daily_nutrition
WHERE date >= %(start)s AND date <= %(end)s
ORDER BY date ASC
"""
