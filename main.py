import threading

import webview

from web_app import app

WINDOW_TITLE = "Habit Tracker"


# ---------------- Flask Backend ---------------- #
def start_flask():
    # Flask runs on the configured localhost port
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=False)


# ---------------- PyWebView Frontend ---------------- #
def main():
    url = f"http://{app.config['HOST']}:{app.config['PORT']}"
    print(f"[launcher] serving habit tracker on {url}")

    # Run Flask in a separate thread
    threading.Thread(target=start_flask, daemon=True).start()

    # Open a pywebview window pointing to the Flask app
    webview.create_window(WINDOW_TITLE, url)
    webview.start()


if __name__ == "__main__":
    main()
