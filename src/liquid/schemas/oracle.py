from typing import List

from pydantic import BaseModel


class OracleInfo(BaseModel):
    standard_asset: str
    supported_assets: List[str]
    minimum_update_interval: int
    last_price_update: int


class AssetRequest(BaseModel):
    asset: str


class PricesUpdate(BaseModel):
    # one price per supported asset, standard asset last
    prices: List[int]


class IntervalUpdate(BaseModel):
    interval: int


class Prices(BaseModel):
    assets: List[str]
    prices: List[int]
    share_prices: List[int]


class Conversion(BaseModel):
    asset: str
    amount: int
    result: int


class SharePrice(BaseModel):
    standard_price: int
