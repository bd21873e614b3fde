from fastapi import APIRouter, Depends, HTTPException

from salon_booking.api.v1.schemas import ReviewCreateSchema, ReviewSchema, dump
from salon_booking.application.exceptions import ResourceNotFoundError
from salon_booking.application.use_cases.reviews import ReviewsUseCase
from salon_booking.wiring.dependencies import get_reviews_use_case

router = APIRouter()


# ==================== PUBLIC ROUTES ====================

@router.get("")
def list_approved_reviews(uc: ReviewsUseCase = Depends(get_reviews_use_case)):
    reviews = uc.list_public()
    return {"success": True, "count": len(reviews), "reviews": [dump(ReviewSchema.from_entity(r)) for r in reviews]}


@router.post("", status_code=201)
def create_review(
    req: ReviewCreateSchema,
    uc: ReviewsUseCase = Depends(get_reviews_use_case),
):
    review = uc.submit(req.to_entity())
    return {
        "success": True,
        "message": "Review submitted successfully. It will be visible after approval.",
        "review": dump(ReviewSchema.from_entity(review)),
    }


# ==================== ADMIN ROUTES ====================

@router.get("/all")
def list_all_reviews(uc: ReviewsUseCase = Depends(get_reviews_use_case)):
    reviews = uc.list_all()
    return {"success": True, "count": len(reviews), "reviews": [dump(ReviewSchema.from_entity(r)) for r in reviews]}


@router.put("/{review_id}/approve")
def approve_review(
    review_id: str,
    uc: ReviewsUseCase = Depends(get_reviews_use_case),
):
    try:
        review = uc.approve(review_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "message": "Review approved successfully", "review": dump(ReviewSchema.from_entity(review))}


@router.delete("/{review_id}")
def delete_review(
    review_id: str,
    uc: ReviewsUseCase = Depends(get_reviews_use_case),
):
    try:
        uc.delete(review_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "message": "Review deleted successfully"}
