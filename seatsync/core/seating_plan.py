"""
Built-in seating plan used to seed an empty record.

Each entry is a table definition: id, category and the ordered guest names.
Table ids follow the floor plan (no tables 4, 14 or 24).
"""

DEFAULT_SEATING_PLAN = [
    {
        "id": "main",
        "category": "Head Table",
        "guests": ["Groom", "Bride", "Best Man", "Maid of Honour", "Father of the Bride", "Mother of the Bride"],
    },
    {"id": "1", "category": "Groom's Family", "guests": ["Uncle Wei", "Aunt Lin", "Cousin Hao", "Cousin Mei"]},
    {"id": "2", "category": "Groom's Family", "guests": ["Grandma Chen", "Grandpa Chen", "Uncle Jun"]},
    {"id": "3", "category": "Bride's Family", "guests": ["Aunt Rosa", "Uncle Marco", "Cousin Lucia"]},
    {"id": "5", "category": "Bride's Family", "guests": ["Nonna Giulia", "Cousin Paolo"]},
    {"id": "6", "category": "University Friends", "guests": ["Alex Kim", "Priya Shah", "Tom Becker"]},
    {"id": "7", "category": "University Friends", "guests": ["Sara Novak", "Daniel Ortiz"]},
    {"id": "8", "category": "Colleagues", "guests": ["Helen Park", "Ravi Patel", "Jonas Weber"]},
    {"id": "9", "category": "Colleagues", "guests": []},
    {"id": "10", "category": "Vegetarian", "guests": ["Mia Lopez", "Noah Fischer"]},
    {"id": "11", "category": "Neighbours", "guests": []},
    {"id": "12", "category": "Neighbours", "guests": []},
    {"id": "13", "category": "Childhood Friends", "guests": []},
    {"id": "15", "category": "Childhood Friends", "guests": []},
    {"id": "16", "category": "Groom's Friends", "guests": []},
    {"id": "17", "category": "Groom's Friends", "guests": []},
    {"id": "18", "category": "Bride's Friends", "guests": []},
    {"id": "19", "category": "Bride's Friends", "guests": []},
    {"id": "20", "category": "Family Friends", "guests": []},
    {"id": "21", "category": "Family Friends", "guests": []},
    {"id": "22", "category": "Guests", "guests": []},
    {"id": "23", "category": "Guests", "guests": []},
    {"id": "25", "category": "Guests", "guests": []},
    {"id": "26", "category": "Guests", "guests": []},
    {"id": "27", "category": "Children", "guests": []},
    {"id": "28", "category": "Staff", "guests": []},
]
