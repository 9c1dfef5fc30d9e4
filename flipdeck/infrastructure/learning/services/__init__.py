from .csv_card_parser import parse_csv

__all__ = ["parse_csv"]
