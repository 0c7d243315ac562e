"""Default controller: every response path frugal can take.

Run:
    cd examples/default && frugal run app:app
    # or: python app.py
"""

import asyncio

from frugal import App, AppConfig, HTTPException, controller, delete, get, patch, post, put, status


# The class decorator sets the prefix every route below is mounted under.
@controller("/api")
class DefaultController:
    # Route decorators declare the method + path; @status overrides the
    # success code.
    @get("/")
    @status(300)
    def index_action(self, request):
        # Plain values are sent as JSON.
        return {"hello": "hi!"}

    @get("/:id")
    @status(200)
    def id_action(self, request):
        return {"id": request.path_params["id"]}

    # Without @status, POST answers 201 and everything else 200.
    # HTTPException picks its own status and message.
    @post("/")
    def post_action(self, request):
        raise HTTPException("Forbidden", 403)

    # Async handlers are awaited; unexpected errors become a 500 and
    # are logged with the route that raised them.
    @put("/")
    async def put_action(self, request):
        await asyncio.sleep(0)
        raise RuntimeError("rejected")

    # Taking a second argument gives direct access to the response.
    @delete("/")
    def delete_action(self, request, response):
        response.json(
            {"message": "Ignore the router and directly access the response writer"}
        )

    # Returning nothing without writing sends 204 No Content and logs
    # a warning, since it's usually a mistake.
    @patch("/")
    def patch_action(self, request, response):
        pass


app = App(AppConfig.from_env()).register(DefaultController)


if __name__ == "__main__":
    app.run()
