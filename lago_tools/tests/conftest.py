import copy

import pytest

from lago_tools.api_codegen.document import parse_document

STATUS_VALUES = ["pending", "active", "sold"]

SAMPLE_SPEC = {
    "openapi": "3.0.0",
    "info": {"title": "Lago API", "version": "1.0.0"},
    "paths": {
        "/api/products": {
            "get": {
                "summary": "List products",
                "tags": ["Products", "App"],
                "parameters": [
                    {"name": "page", "in": "query", "schema": {"type": "integer"}},
                    {"name": "status", "in": "query", "schema": {"type": "string", "enum": STATUS_VALUES}},
                ],
                "responses": {
                    "200": {
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "properties": {
                                        "products": {"type": "array", "items": {"$ref": "#/components/schemas/Product"}},
                                        "pagination": {"$ref": "#/components/schemas/Pagination"},
                                    },
                                    "required": ["products", "pagination"],
                                }
                            }
                        }
                    }
                },
            },
            "post": {
                "summary": "Create product",
                "tags": ["Products", "App"],
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {
                                "type": "object",
                                "properties": {
                                    "title": {"type": "string"},
                                    "price": {"type": "number"},
                                    "category": {"type": "string", "enum": ["toys", "gaming"]},
                                },
                                "required": ["title", "price"],
                            }
                        }
                    }
                },
                "responses": {
                    "201": {"content": {"application/json": {"schema": {"$ref": "#/components/schemas/Product"}}}}
                },
            },
        },
        "/api/products/{id}": {
            "parameters": [{"name": "id", "in": "path", "required": True, "schema": {"type": "string"}}],
            "get": {
                "summary": "Get product",
                "tags": ["Products", "App"],
                "responses": {
                    "200": {"content": {"application/json": {"schema": {"$ref": "#/components/schemas/Product"}}}}
                },
            },
            "put": {
                "tags": ["Products", "App"],
                "requestBody": {
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Product"}}}
                },
            },
            "delete": {"summary": "Delete product", "tags": ["Products", "App"]},
        },
        "/api/products/{id}/like": {
            "post": {
                "summary": "Like product",
                "tags": ["Products", "App"],
                "parameters": [{"name": "id", "in": "path", "required": True, "schema": {"type": "string"}}],
            }
        },
        "/api/auth/login": {
            "post": {
                "summary": "Log in",
                "tags": ["Auth"],
                "requestBody": {
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/LoginRequest"}}}
                },
            }
        },
        "/api/uploads": {
            "post": {
                "summary": "Upload file",
                "tags": ["Uploads", "App"],
                "requestBody": {
                    "content": {
                        "multipart/form-data": {
                            "schema": {"type": "object", "properties": {"file": {"type": "string", "format": "binary"}}}
                        }
                    }
                },
            }
        },
        "/api/admin/users": {
            "get": {"summary": "List users", "tags": ["AdminUsers", "Operation"]}
        },
        "/api/billing/invoices": {
            "get": {"summary": "List invoices", "tags": ["Billing"]}
        },
    },
    "components": {
        "schemas": {
            "Product": {
                "type": "object",
                "properties": {
                    "id": {"type": "string"},
                    "title": {"type": "string"},
                    "status": {"type": "string", "enum": STATUS_VALUES},
                    "images": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["id", "title", "status"],
            },
            "Order": {
                "type": "object",
                "properties": {
                    "id": {"type": "string"},
                    "productStatus": {"type": "string", "enum": STATUS_VALUES},
                    "deliveryType": {"type": "string", "enum": ["self_pickup", "delivery"]},
                },
            },
            "Pagination": {
                "type": "object",
                "properties": {"page": {"type": "integer"}, "total": {"type": "integer"}},
                "required": ["page", "total"],
            },
            "LoginRequest": {
                "type": "object",
                "properties": {"phone": {"type": "string"}, "password": {"type": "string"}},
                "required": ["phone", "password"],
            },
        }
    },
}


@pytest.fixture
def raw_spec():
    return copy.deepcopy(SAMPLE_SPEC)


@pytest.fixture
def document(raw_spec):
    return parse_document(raw_spec)
