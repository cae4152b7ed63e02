"""Request classes of the sample application."""


class Unique:
    """Rule object: value must not exist in ``table``."""

    def __init__(self, table: str, column: str = "id"):
        self.table = table
        self.column = column


class Request:
    def __init__(self, data: dict | None = None):
        self.data = data or {}

    def validate(self, rules: dict) -> dict:
        return {key: self.data.get(key) for key in rules}


class StoreUserRequest(Request):
    def __init__(self, data: dict | None = None):
        # never called by the documentator
        raise RuntimeError("needs a live request")

    def rules(self):
        return {
            "name": "required|string|max:255",
            "email": ["required", "email", Unique("users", "email")],
            "age": "integer|min:18|nullable",
            "role": "in:admin,editor,viewer",
        }


class StorePostRequest(Request):
    def rules(self):
        return {
            "title": "required|string|min:3|max:120",
            "user_id": "required|integer|exists:users,id",
            "tags": "array|max:5",
            "items.*.sku": "required|string",
            "items.*.quantity": "integer|min:1",
            "meta.source": "string",
        }


class BrokenRequest(Request):
    def rules(self):
        raise ValueError("rules need a database")
