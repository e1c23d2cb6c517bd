import discord
import pytest

from habitquest.app.bot import HabitBot
from habitquest.app.services import Services
from habitquest.exceptions.internal import ServicesNotInitialized


# Client.__init__ attend une boucle asyncio courante : tests asynchrones.
@pytest.mark.asyncio
async def test_bot_state_accessors():
    bot = HabitBot(intents=discord.Intents.none())

    assert bot.services is None
    assert not bot.is_booted()
    bot.set_booted(True)
    assert bot.is_booted()

    bot.set_started_at(12.5)
    assert bot.get_started_at() == 12.5
    assert bot.get_discord_started_at() is None
    bot.set_discord_started_at(13.0)
    assert bot.get_discord_started_at() == 13.0


@pytest.mark.asyncio
async def test_require_services(progress_service):
    bot = HabitBot(intents=discord.Intents.none())
    with pytest.raises(ServicesNotInitialized):
        bot.require_services()

    bot.services = Services(progress=progress_service)
    assert bot.require_services().progress is progress_service
    assert len(bot.services) == 1
