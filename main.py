import discord, os, asyncio, logging, sqlite3, getpass
from discord.ext import commands

from lotto.config import load_config
from lotto.lifecycle import ConnectionLifecycle

config = load_config(); TOKEN = config.token

# Set up logger, console plus an optional log file
handlers = [logging.StreamHandler()]
if config.log_file:
    handlers.append(logging.FileHandler(config.log_file))
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format='[%(asctime)s] %(levelname)s:%(name)s: %(message)s',
    handlers=handlers
)
logger = logging.getLogger()

intents = discord.Intents.default()
intents.members = True # Lotto draws winners from the member list
intents.message_content = True # Lotto commands are plain-text messages

# Do NOT change to autosharded, this is built on "Sqlite" which struggles with sharding
# Only mention-prefixed bot commands, so "!lotto ..." messages never reach the command parser
bot = commands.Bot(command_prefix=commands.when_mentioned, intents=intents); bot.remove_command('help')

def setup_database(path: str):
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row  # Enable dictionary-style access
    return conn

# Store the database connection and config in the bot instance
bot.db = setup_database(config.database_path)
bot.config = config
lifecycle = ConnectionLifecycle()

async def load_cogs():
    # Load all cogs that aren't already loaded
    for filename in os.listdir('./cogs'):
        if filename.endswith('.py') and not filename.startswith('_'):
            cog_name = f'cogs.{filename[:-3]}'
            if cog_name not in bot.extensions:
                try:
                    await bot.load_extension(cog_name)
                    logger.info(f'Loaded cog: {filename[:-3]}')
                    await asyncio.sleep(1)
                except Exception as e:
                    logger.error(f'Failed to load cog {filename[:-3]}: {e}')

@bot.event
async def on_ready():
    if lifecycle.on_ready(bot):
        await load_cogs()

@bot.event
async def on_resumed():
    lifecycle.on_resumed()

@bot.event
async def on_error(event, *args, **kwargs):
    lifecycle.on_error(event)

def main():
    global TOKEN
    if TOKEN == "STRING":
        print("While providing your bot token, it will not be displayed but it is there...\nsimply copy it and paste it into the prompt below.\n")
        TOKEN = getpass.getpass("[ALERT] Please enter your Discord bot token: ")
        # Safely update only the TOKEN line in .env
        if os.path.exists('.env'):
            with open('.env', 'r') as f:
                lines = f.readlines()
            with open('.env', 'w') as f:
                for line in lines:
                    if line.strip().startswith('TOKEN'):
                        f.write(f'TOKEN = \'{TOKEN}\'\n')
                    else:
                        f.write(line)
        else:
            with open('.env', 'w') as f:
                f.write(f'TOKEN = \'{TOKEN}\'\n')

    if not TOKEN:
        logger.error("No bot token configured, set TOKEN in the environment or .env")
        raise SystemExit(1)

    bot.run(TOKEN, log_handler=None)

if __name__ == '__main__':
    main()
