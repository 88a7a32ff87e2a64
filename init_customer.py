"""
Provision a customer and print its API token.

Example:
    python init_customer.py --name "Acme" --plan pro
    python init_customer.py --id acme --name "Acme" --plan pro --token acme-token
"""
import argparse
import asyncio

from gateway.infrastructure.database import get_session, init_db
from gateway.modules.customers import CustomerAlreadyExistsError, CustomerCreateInput, CustomerService


async def create_customer(args: argparse.Namespace) -> int:
    await init_db()

    async for db in get_session():
        service = CustomerService.with_session(db)
        try:
            customer, token = await service.create_customer(
                CustomerCreateInput(
                    id=args.id,
                    name=args.name,
                    plan_type=args.plan,
                    token=args.token,
                )
            )
        except CustomerAlreadyExistsError as exc:
            print(exc)
            return 1
        await db.commit()

        print(f"Customer created: {customer.id} ({customer.plan_type})")
        print(f"Token: {token}")
    return 0


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Provision a gateway customer")
    parser.add_argument("--id", help="customer id, generated when omitted")
    parser.add_argument("--name", required=True)
    parser.add_argument("--plan", default="free", help="plan tier used as a script tag")
    parser.add_argument("--token", help="API token, generated when omitted")
    return parser.parse_args()


if __name__ == "__main__":
    raise SystemExit(asyncio.run(create_customer(parse_args())))
