import discord
import os
import threading
from datetime import datetime, timezone
from html import escape
from http.server import HTTPServer, BaseHTTPRequestHandler

from dotenv import load_dotenv

from cooldown import CooldownTracker
from dispatcher import CommandDispatcher
from formatting import PREFIX as DEFAULT_PREFIX
from leaderboard_api import DEFAULT_TIMEOUT, LeaderboardAPI

load_dotenv()

# Bot configuration
TOKEN = os.getenv('DISCORD_TOKEN') or os.getenv('DISCORD_BOT_TOKEN')
API_BASE = os.getenv('API_BASE', 'http://localhost:4000').rstrip('/')
API_TIMEOUT = float(os.getenv('API_TIMEOUT', DEFAULT_TIMEOUT))
REFRESH_CAMPAIGN = os.getenv('REFRESH_CAMPAIGN', '').strip().lower() in ('1', 'true', 'yes', 'on')
PREFIX = os.getenv('COMMAND_PREFIX', DEFAULT_PREFIX)
PORT = os.getenv('PORT')  # Set on hosts like Render that expect a web port


def render_status_page(bot_user, api_base: str, prefix: str, cooldown_users: int) -> str:
    login = escape(str(bot_user)) if bot_user else 'Connecting...'
    return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <title>India Top 10 Bot</title>
            <meta http-equiv="refresh" content="30">
            <style>
                body {{ font-family: Arial, sans-serif; margin: 40px; background: #2c2f33; color: white; }}
                .container {{ max-width: 600px; margin: 0 auto; }}
                .status {{ background: #23272a; padding: 20px; border-radius: 8px; margin: 20px 0; }}
                .online {{ color: #43b581; }}
                .info {{ color: #7289da; }}
            </style>
        </head>
        <body>
            <div class="container">
                <h1>🏁 India Top 10 Bot</h1>
                <div class="status">
                    <h2 class="online">✅ Bot Status: Online</h2>
                    <p class="info">Logged in as: {login}</p>
                    <p class="info">Leaderboard API: {escape(api_base)}</p>
                    <p class="info">Users seen: {cooldown_users}</p>
                    <p>Last Updated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')}</p>
                </div>
                <div class="status">
                    <h3>Available Commands:</h3>
                    <ul>
                        <li><code>{escape(prefix)}map &lt;tmxId&gt;</code> - India Top 10 for a TMX map</li>
                        <li><code>{escape(prefix)}all</code> - India Top 10 for the current campaign</li>
                        <li><code>{escape(prefix)}help</code> - Show help</li>
                    </ul>
                </div>
            </div>
        </body>
        </html>
        """


def make_health_handler(bot: 'IndiaTopBot'):
    class HealthCheckHandler(BaseHTTPRequestHandler):
        def do_GET(self):
            page = render_status_page(bot.user, bot.dispatcher.api.base_url,
                                      bot.dispatcher.prefix, len(bot.dispatcher.cooldowns))
            self.send_response(200)
            self.send_header('Content-type', 'text/html; charset=utf-8')
            self.end_headers()
            self.wfile.write(page.encode())

        def log_message(self, format, *args):
            # Keep the console for bot output
            pass

    return HealthCheckHandler


def start_http_server(bot: 'IndiaTopBot', port: int):
    """Serve the status page so web-service hosts see a live port"""
    try:
        server = HTTPServer(('0.0.0.0', port), make_health_handler(bot))
        print(f"🌐 HTTP server started on port {port}")
        server.serve_forever()
    except OSError as e:
        print(f"❌ HTTP server error: {e}")


class IndiaTopBot(discord.Client):
    def __init__(self, dispatcher: CommandDispatcher):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents)
        self.dispatcher = dispatcher

    async def on_ready(self):
        print(f"✅ Logged in as {self.user}")

    async def on_message(self, message: discord.Message):
        await self.dispatcher.handle_message(message)


def build_bot() -> IndiaTopBot:
    api = LeaderboardAPI(API_BASE, timeout=API_TIMEOUT)
    dispatcher = CommandDispatcher(api, CooldownTracker(), prefix=PREFIX,
                                   refresh_campaign=REFRESH_CAMPAIGN)
    return IndiaTopBot(dispatcher)


def main():
    if not TOKEN:
        print("❌ Please set DISCORD_TOKEN environment variable")
        raise SystemExit(1)

    print("🚀 Starting India Top 10 Bot...")
    print(f"🔧 Leaderboard API: {API_BASE} (timeout {API_TIMEOUT:g}s)")
    if REFRESH_CAMPAIGN:
        print("🔄 Campaign refresh before each lookup is enabled")

    bot = build_bot()

    if PORT:
        http_thread = threading.Thread(target=start_http_server, args=(bot, int(PORT)), daemon=True)
        http_thread.start()
    else:
        print("⚠️ PORT not set - status page disabled")

    try:
        bot.run(TOKEN)
    except KeyboardInterrupt:
        print("\n🛑 Bot stopped by user")
    except discord.LoginFailure as e:
        print(f"❌ Login failed: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
