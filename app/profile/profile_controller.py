from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from app.common.controller import BaseController


PROFILE_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>User Profile</title>
</head>
<body>
    <h1>User Profile</h1>

    <form id="delete-user-form">
        <label for="other-username">Enter Username to Delete:</label>
        <input type="text" id="other-username" name="other-username" required>
        <button type="submit">Delete User</button>
    </form>

    <script>
        document.getElementById("delete-user-form").addEventListener("submit", async (event) => {
            event.preventDefault();
            const username = document.getElementById("other-username").value;

            const response = await fetch("/auth/delete/user", {
                method: "POST",
                headers: {
                    "Content-Type": "application/json"
                },
                body: JSON.stringify({ username }),
                credentials: "include"
            });

            const result = await response.json();

            if (result.ok) {
                alert("User deleted successfully");
            } else {
                alert(result.message);
            }
        });
    </script>
</body>
</html>
"""


class ProfileController(BaseController):
    prefix = ""
    base_path = ""
    tags = ["profile"]

    @property
    def router(self) -> APIRouter:
        @self.api_router.get("/profile", response_class=HTMLResponse)
        async def profile() -> HTMLResponse:
            """Static page with a form that posts to the delete-user endpoint."""
            return HTMLResponse(content=PROFILE_PAGE)

        return self.api_router
