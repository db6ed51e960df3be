from pymongo import MongoClient
import os
from dotenv import load_dotenv

# Ensure dnspython is importable (needed for mongodb+srv:// URIs)
try:
    import dns  # noqa: F401
    print("dnspython is installed and importable")
except ImportError:
    print("dnspython is NOT installed")

load_dotenv()
uri = os.getenv("DATABASE_URL")
db_name = os.getenv("MONGO_DB_NAME")
print(f"URI found: {'Yes' if uri else 'No'}")
if uri:
    # mask credentials
    print(f"URI start: {uri.split('@')[-1] if '@' in uri else '...'}")

try:
    client = MongoClient(uri)
    client.admin.command('ping')
    print("MongoDB Connection Successful!")
    if db_name:
        blogs = client[db_name].blogs
        has_text_index = any("textIndexVersion" in info for info in blogs.index_information().values())
        print(f"Text index present: {'Yes' if has_text_index else 'No (run create_indexes.py)'}")
        print(f"Published blogs: {blogs.count_documents({'is_published': True})}")
except Exception as e:
    print(f"Connection Failed: {e}")
