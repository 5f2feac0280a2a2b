"""Composition root example: prints spot prices for a few coins."""

import asyncio
import logging
import sys

from cfnet import (
    AioHttpNetworkDispatcher,
    DispatcherConfig,
    NetworkSettings,
    RequestData,
    RequestType,
    configure_logging,
)

logger = logging.getLogger("cfnet.app")

PRICE_URL = "https://api.coingecko.com/api/v3/simple/price"


class GetSpotPrices(RequestType[dict[str, dict[str, float]]]):
    def __init__(self, coins: list[str], currency: str = "usd"):
        self.coins = coins
        self.currency = currency

    @property
    def data(self) -> RequestData:
        return RequestData(
            path=f"{PRICE_URL}?ids={','.join(self.coins)}&vs_currencies={self.currency}",
            headers={"Accept": "application/json"},
        )


async def main(coins: list[str]) -> None:
    settings = NetworkSettings()
    configure_logging(settings.CFNET_LOG_LEVEL)
    settings.print_settings()

    done = asyncio.Event()

    def on_success(prices):
        for coin, quote in sorted(prices.items()):
            logger.info("%s: %s", coin, quote)
        done.set()

    def on_error(error):
        logger.error("price request failed: %r", error)
        done.set()

    async with AioHttpNetworkDispatcher(DispatcherConfig.from_settings(settings)) as dispatcher:
        GetSpotPrices(coins).execute(on_success, on_error, dispatcher=dispatcher)
        await done.wait()


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:] or ["bitcoin", "ethereum"]))
