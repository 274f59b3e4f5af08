import os

from attendance_bridge import create_app

app = create_app()


if __name__ == "__main__":
    # use_reloader=False: the reloader would start a second scheduler in the child process.
    app.run(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        debug=app.config["DEBUG"],
        use_reloader=False,
    )
