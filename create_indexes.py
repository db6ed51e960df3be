# run from project root: python create_indexes.py
from blogapi.database.connection import BLOG_TEXT_INDEX, db, ensure_indexes


def create_indexes():
    ensure_indexes(db)
    for name in db.blogs.index_information():
        marker = " (search)" if name == BLOG_TEXT_INDEX else ""
        print(f"index {name}{marker}")


if __name__ == "__main__":
    create_indexes()
