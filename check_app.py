import sys
import os

# Add the app directory to sys.path
sys.path.append(os.path.join(os.getcwd(), "services/api"))

try:
    from app.main import app
    print("App imported successfully")

    # Check routes
    expected = {"/api/recipes/parse", "/api/shopping/weekly", "/api/shopping/monthly"}
    paths = {route.path for route in app.routes if hasattr(route, "path")}
    missing = expected - paths

    for path in sorted(expected & paths):
        print(f"Found route: {path}")

    if missing:
        print(f"ERROR: Routes NOT FOUND: {', '.join(sorted(missing))}")
        sys.exit(1)

except Exception as e:
    print(f"App import failed: {e}")
    import traceback
    traceback.print_exc()
    sys.exit(1)
