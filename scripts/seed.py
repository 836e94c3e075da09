"""Seed the showroom database with sample banners, brands and cars.

WARNING: wipes the banners, brands, cars and rentals collections first.
Cars are created through the catalog layer so brand carCounts come out right.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from showroom.config import load_config
from showroom.db import connect, init_db
from showroom.auth.crud import bootstrap_admin_if_needed
from showroom.catalog.banners import create_banner
from showroom.catalog.brands import create_brand
from showroom.catalog.cars import create_car
from showroom.models import BannerCreate, BrandCreate, CarCreate
from showroom.schema import BANNERS, BRANDS, CARS, RENTALS


UNSPLASH = "https://images.unsplash.com"

BANNERS_DATA = [
    {
        "title": "Welcome to Our Car Showroom",
        "subtitle": "Find Your Dream Car",
        "description": "Discover our extensive collection of premium vehicles from top brands worldwide.",
        "image": f"{UNSPLASH}/photo-1492144534655-ae79c964c9d7?w=1200&q=80",
        "buttonText": "Explore Cars",
        "buttonLink": "/cars",
        "order": 1,
    },
    {
        "title": "Luxury Meets Performance",
        "subtitle": "Premium Car Collection",
        "description": "Experience the perfect blend of luxury, comfort, and cutting-edge technology.",
        "image": f"{UNSPLASH}/photo-1503376780353-7e6692767b70?w=1200&q=80",
        "buttonText": "View Collection",
        "buttonLink": "/cars",
        "order": 2,
    },
    {
        "title": "Rent Your Perfect Ride",
        "subtitle": "Car Rental Services",
        "description": "Short-term or long-term rentals available. Drive your dream car today!",
        "image": f"{UNSPLASH}/photo-1449824913935-59a10b8d2000?w=1200&q=80",
        "buttonText": "Rent Now",
        "buttonLink": "/rental",
        "order": 3,
    },
]

BRANDS_DATA = [
    {"name": "Toyota", "country": "Japan", "foundedYear": 1937, "order": 1,
     "website": "https://www.toyota.com",
     "description": "Japanese automotive manufacturer known for reliability and innovation."},
    {"name": "BMW", "country": "Germany", "foundedYear": 1916, "order": 2,
     "website": "https://www.bmw.com",
     "description": "German luxury vehicle manufacturer known for performance and luxury."},
    {"name": "Mercedes-Benz", "country": "Germany", "foundedYear": 1926, "order": 3,
     "website": "https://www.mercedes-benz.com",
     "description": "German luxury automotive brand known for engineering excellence."},
    {"name": "Audi", "country": "Germany", "foundedYear": 1909, "order": 4,
     "website": "https://www.audi.com",
     "description": "German luxury automobile manufacturer known for innovation and design."},
    {"name": "Honda", "country": "Japan", "foundedYear": 1948, "order": 5,
     "website": "https://www.honda.com",
     "description": "Japanese automotive manufacturer known for reliability and fuel efficiency."},
]

CARS_DATA = [
    {
        "name": "Toyota Camry 2024", "brand": "Toyota", "model": "Camry", "year": 2024, "price": 25000,
        "description": "The Toyota Camry combines style, efficiency, and reliability in a midsize sedan.",
        "images": [f"{UNSPLASH}/photo-1621007947382-bb3c3994e3fb?w=800&q=80"],
        "specifications": {"engine": "2.5L 4-Cylinder", "fuelType": "Petrol", "transmission": "Automatic",
                           "seating": 5, "fuelEconomy": "28/39 mpg", "topSpeed": "130 mph",
                           "acceleration": "0-60 in 8.4s", "color": "Silver"},
        "features": ["Adaptive Cruise Control", "Lane Departure Warning", "Apple CarPlay"],
        "category": "Sedan", "isRental": True, "rentalPrice": 45, "isFeatured": True,
    },
    {
        "name": "BMW X5 2024", "brand": "BMW", "model": "X5", "year": 2024, "price": 65000,
        "description": "The BMW X5 is a luxury SUV that delivers exceptional performance and comfort.",
        "images": [f"{UNSPLASH}/photo-1555215695-3004980ad54e?w=800&q=80"],
        "specifications": {"engine": "3.0L Twin-Turbo I6", "fuelType": "Petrol", "transmission": "Automatic",
                           "seating": 7, "fuelEconomy": "21/26 mpg", "topSpeed": "155 mph",
                           "acceleration": "0-60 in 5.8s", "color": "Black"},
        "features": ["xDrive AWD", "Panoramic Sunroof", "Harman Kardon Audio"],
        "category": "SUV", "isRental": True, "rentalPrice": 120, "isFeatured": True,
    },
    {
        "name": "Mercedes-Benz C-Class 2024", "brand": "Mercedes-Benz", "model": "C-Class", "year": 2024,
        "price": 45000,
        "description": "The C-Class sets the standard for luxury sedans with a refined interior.",
        "images": [f"{UNSPLASH}/photo-1563720223185-11003d516935?w=800&q=80"],
        "specifications": {"engine": "2.0L Turbo 4-Cylinder", "fuelType": "Petrol", "transmission": "Automatic",
                           "seating": 5, "fuelEconomy": "23/32 mpg", "color": "White"},
        "features": ["MBUX Infotainment", "Active Brake Assist", "LED Headlights"],
        "category": "Sedan", "isFeatured": True,
    },
    {
        "name": "Honda Civic 2024", "brand": "Honda", "model": "Civic", "year": 2024, "price": 24000,
        "description": "A compact car with sporty handling and excellent fuel economy.",
        "images": [f"{UNSPLASH}/photo-1606664515524-ed2f786a0bd6?w=800&q=80"],
        "specifications": {"engine": "1.5L Turbo", "fuelType": "Petrol", "transmission": "CVT",
                           "seating": 5, "fuelEconomy": "31/40 mpg", "color": "Blue"},
        "features": ["Honda Sensing", "Wireless CarPlay"],
        "category": "Sedan",
    },
]


def main() -> None:
    cfg = load_config()
    with connect(cfg.MONGODB_URI, cfg.MONGODB_DB) as db:
        for name in (BANNERS, BRANDS, CARS, RENTALS):
            db[name].delete_many({})
        print("Cleared catalog collections")

        init_db(db)

        for b in BANNERS_DATA:
            create_banner(db, BannerCreate(**b))
        print(f"Created {len(BANNERS_DATA)} banners")

        for b in BRANDS_DATA:
            logo = f"{UNSPLASH}/photo-1617788138017-80ad40651399?w=200&q=80"
            create_brand(db, BrandCreate(logo=logo, **b))
        print(f"Created {len(BRANDS_DATA)} brands")

        for c in CARS_DATA:
            create_car(db, CarCreate(**c))
        print(f"Created {len(CARS_DATA)} cars")

        admin = bootstrap_admin_if_needed(db, cfg)
        if admin:
            print(f"Created admin user: {admin['email']}")

    print("Seeding complete")


if __name__ == "__main__":
    main()
