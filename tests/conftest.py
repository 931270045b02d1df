"""Shared dashboard fixtures (raw rows, as a CSV loader would produce them)."""

import pytest


MONTHLY_SALES = [
    {"Month": "Jan 2025", "Revenue": "100000", "Orders": "1000", "AOV": "100.00"},
    {"Month": "Feb 2025", "Revenue": "90000", "Orders": "950", "AOV": "94.74"},
    {"Month": "Mar 2025", "Revenue": "80000", "Orders": "900", "AOV": "88.89"},
    {"Month": "Apr 2025", "Revenue": "95000", "Orders": "980", "AOV": "96.94"},
    {"Month": "May 2025", "Revenue": "130000", "Orders": "1200", "AOV": "108.33"},
]

PRODUCT_CATEGORIES = [
    {"Category": "Electronics", "Revenue": "1500000", "Margin": "0.22", "YoYGrowth": "0.08", "Profit": "330000"},
    {"Category": "Apparel", "Revenue": "950000", "Margin": "0.45", "YoYGrowth": "-0.05", "Profit": "427500"},
    {"Category": "Beauty", "Revenue": "640000", "Margin": "0.52", "YoYGrowth": "0.18", "Profit": "332800"},
    {"Category": "Home", "Revenue": "800000", "Margin": "0.30", "YoYGrowth": "0.02", "Profit": "240000"},
]

TRAFFIC_SOURCES = [
    {"Source": "Organic", "Visits": "50000", "ConversionRate": "0.035", "BounceRate": "0.42", "AOV": "78.00", "Revenue": "136500"},
    {"Source": "Paid", "Visits": "30000", "ConversionRate": "0.028", "BounceRate": "0.55", "AOV": "95.50", "Revenue": "80220"},
    {"Source": "Email", "Visits": "8000", "ConversionRate": "0.062", "BounceRate": "0.25", "AOV": "88.00", "Revenue": "43648"},
    {"Source": "Social", "Visits": "20000", "ConversionRate": "0.012", "BounceRate": "0.68", "AOV": "65.00", "Revenue": "15600"},
]

CUSTOMER_DEMOGRAPHICS = [
    {"AgeGroup": "18-24", "Gender": "Male", "CustomerCount": "500", "AvgAnnualSpend": "300", "TotalSpend": "150000"},
    {"AgeGroup": "18-24", "Gender": "Female", "CustomerCount": "600", "AvgAnnualSpend": "280", "TotalSpend": "168000"},
    {"AgeGroup": "25-34", "Gender": "Male", "CustomerCount": "800", "AvgAnnualSpend": "450", "TotalSpend": "360000"},
    {"AgeGroup": "25-34", "Gender": "Female", "CustomerCount": "900", "AvgAnnualSpend": "410", "TotalSpend": "369000"},
    {"AgeGroup": "35-44", "Gender": "Male", "CustomerCount": "400", "AvgAnnualSpend": "620", "TotalSpend": "248000"},
]

MARKETING_CAMPAIGNS = [
    {"Campaign": "Spring Sale", "Type": "Email", "Spend": "10000", "Revenue": "45000", "ROI_Percent": "350", "CAC": "25", "NewCustomers": "400"},
    {"Campaign": "Summer Promo", "Type": "Social", "Spend": "20000", "Revenue": "50000", "ROI_Percent": "150", "CAC": "95", "NewCustomers": "210"},
    {"Campaign": "Holiday Blast", "Type": "Email", "Spend": "15000", "Revenue": "60000", "ROI_Percent": "300", "CAC": "30", "NewCustomers": "500"},
    {"Campaign": "Retarget", "Type": "Display", "Spend": "12000", "Revenue": "14000", "ROI_Percent": "16.7", "CAC": "120", "NewCustomers": "100"},
]


@pytest.fixture()
def sample_bundle() -> dict:
    return {
        "monthlySales": [dict(r) for r in MONTHLY_SALES],
        "productCategories": [dict(r) for r in PRODUCT_CATEGORIES],
        "trafficSources": [dict(r) for r in TRAFFIC_SOURCES],
        "customerDemographics": [dict(r) for r in CUSTOMER_DEMOGRAPHICS],
        "marketingCampaigns": [dict(r) for r in MARKETING_CAMPAIGNS],
    }
