from sqlmodel import SQLModel
from .liquids import Liquid, LiquidBase
from .oracle import OracleState, SupportedAsset
from .vault import VaultState, ShareBalance, ShareAllowance, Strategy
from .cashier import CashierState, CashierParameter, DepositPosition, PendingWithdrawal
from .fee_splitter import FeeSplitterState
from .roles import RoleMember
from .events import LiquidEvent
from .tokens import Token, TokenBalance, TokenAllowance
