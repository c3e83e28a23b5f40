from __future__ import annotations

from typing import Any

GET_A_POST = """
query {
  post(id: 1) {
    id
    title
    body
  }
}
"""

DELETE_A_POST = """
mutation ($id: ID!) {
  deletePost(id: $id)
}
"""

EXPECTED_FIRST_POST = {
    "post": {
        "id": "1",
        "title": "sunt aut facere repellat provident occaecati excepturi optio reprehenderit",
        "body": (
            "quia et suscipit\nsuscipit recusandae consequuntur expedita et cum\n"
            "reprehenderit molestiae ut ut quas totam\nnostrum rerum est autem sunt rem eveniet architecto"
        ),
    }
}


def delete_variables(post_id: int | str) -> dict[str, Any]:
    return {"id": str(post_id)}
