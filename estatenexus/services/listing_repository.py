"""Listing persistence on the Supabase ``properties`` table."""

from typing import Optional

from pydantic import ValidationError

from estatenexus.models.listing import Listing, ListingForm
from estatenexus.services.roles import RoleEvaluator
from estatenexus.services.supabase_client import SupabaseClient, all_rows, first_row
from estatenexus.utils.errors import SupabaseError
from estatenexus.utils.logging import get_structured_logger, log_timing, timed

logger = get_structured_logger(__name__)

LISTING_SELECT = "*, agent:profiles!agent_id(full_name, email, phone, avatar_url), company:companies(name)"

DEFAULT_AGENT_AVATAR = (
    "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e"
    "?ixlib=rb-4.0.3&auto=format&fit=crop&w=150&h=150&q=80"
)

# Shown when a listing has no joined agent profile
PLACEHOLDER_AGENT = {
    "id": "agent-1",
    "name": "Agent Name",
    "phone": "(555) 123-4567",
    "email": "agent@example.com",
    "avatar": DEFAULT_AGENT_AVATAR,
}


def listing_from_row(row: dict) -> Listing:
    """Map a ``properties`` row (with joined agent profile) to a Listing."""
    agent_row = row.get("agent")
    if agent_row:
        agent = {
            "id": row.get("agent_id") or "",
            "name": agent_row.get("full_name") or "Agent",
            "phone": agent_row.get("phone") or "N/A",
            "email": agent_row.get("email") or "N/A",
            "avatar": agent_row.get("avatar_url") or DEFAULT_AGENT_AVATAR,
        }
    else:
        agent = PLACEHOLDER_AGENT

    return Listing.model_validate({
        "id": str(row["id"]),
        "title": row.get("title") or "",
        "type": row.get("type"),
        "price": row.get("price"),
        "beds": row.get("beds"),
        "baths": row.get("baths"),
        "area": row.get("area"),
        "description": row.get("description") or "",
        "features": row.get("features") or [],
        "images": row.get("images") or [],
        "location": {
            "address": row.get("address") or "",
            "city": row.get("city") or "",
            "state": row.get("state") or "",
            "zip_code": row.get("zip_code") or "",
            "latitude": row.get("latitude"),
            "longitude": row.get("longitude"),
        },
        "year_built": row.get("year_built"),
        "garage_spaces": row.get("garage_spaces"),
        "available": row.get("available", True),
        "created_at": row.get("created_at"),
        "agent": agent,
    })


class ListingRepository:
    """CRUD for listings. Mutations require agent capability."""

    async def fetch_listings(self) -> list[Listing]:
        """All listings, newest first. Rows that fail validation are skipped."""
        with log_timing("fetch_listings", logger=logger):
            async with SupabaseClient() as client:
                try:
                    result = (
                        client.table("properties")
                        .select(LISTING_SELECT)
                        .order("created_at", desc=True)
                        .execute()
                    )
                except Exception as e:
                    raise SupabaseError(f"Failed to fetch listings: {e}")

        listings = []
        for row in all_rows(result):
            try:
                listings.append(listing_from_row(row))
            except (ValidationError, KeyError) as e:
                logger.warning("Skipping invalid listing row", listing_id=row.get("id"), error=str(e))
        return listings

    @timed("fetch_listing", logger=logger)
    async def fetch_listing(self, listing_id: str) -> Optional[Listing]:
        async with SupabaseClient() as client:
            try:
                result = client.table("properties").select(LISTING_SELECT).eq("id", listing_id).execute()
            except Exception as e:
                raise SupabaseError(f"Failed to fetch listing {listing_id}: {e}")

        row = first_row(result)
        if row is None:
            return None
        try:
            return listing_from_row(row)
        except ValidationError as e:
            raise SupabaseError(f"Invalid listing {listing_id}: {e}")

    async def create_listing(self, form: ListingForm, evaluator: RoleEvaluator) -> Listing:
        evaluator.require(evaluator.can_manage_listings(), "create listing")
        principal = evaluator.principal

        row = form.to_row()
        row["agent_id"] = principal.id
        row["company_id"] = form.company_id or principal.company_id

        async with SupabaseClient() as client:
            try:
                result = client.table("properties").insert(row).execute()
            except Exception as e:
                raise SupabaseError(f"Failed to create listing: {e}")

        created = first_row(result)
        if created is None:
            raise SupabaseError("Failed to create listing: no data returned")
        logger.info("Listing created", listing_id=created.get("id"))

        # insert returns the bare row; the creating agent is the owner
        created["agent"] = {
            "full_name": principal.full_name,
            "email": principal.email,
            "phone": principal.phone,
            "avatar_url": principal.avatar_url,
        }
        return listing_from_row(created)

    async def update_listing(self, listing_id: str, form: ListingForm, evaluator: RoleEvaluator) -> Listing:
        evaluator.require(evaluator.can_manage_listings(), "update listing")

        async with SupabaseClient() as client:
            try:
                result = client.table("properties").update(form.to_row()).eq("id", listing_id).execute()
            except Exception as e:
                raise SupabaseError(f"Failed to update listing {listing_id}: {e}")

        if first_row(result) is None:
            raise SupabaseError(f"Failed to update listing: {listing_id}")
        logger.info("Listing updated", listing_id=listing_id)

        listing = await self.fetch_listing(listing_id)
        if listing is None:
            raise SupabaseError(f"Listing disappeared after update: {listing_id}")
        return listing

    async def delete_listing(self, listing_id: str, evaluator: RoleEvaluator) -> None:
        evaluator.require(evaluator.can_manage_listings(), "delete listing")

        async with SupabaseClient() as client:
            try:
                client.table("properties").delete().eq("id", listing_id).execute()
            except Exception as e:
                raise SupabaseError(f"Failed to delete listing {listing_id}: {e}")
        logger.info("Listing deleted", listing_id=listing_id)
