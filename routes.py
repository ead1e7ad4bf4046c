# routes.py — maps /catalog URLs onto controllers
from fastapi import APIRouter, Depends, Request

from controllers import author, book, book_instance, genre
from crud import Store
from deps import get_store, read_form
from views import render

router = APIRouter(prefix="/catalog")


@router.get("/")
async def catalog_home(request: Request, store: Store = Depends(get_store)):
    return render(request, await book.index(store))


# ─────────────────────── AUTHORS ───────────────────────
@router.get("/authors")
async def author_list(request: Request, store: Store = Depends(get_store)):
    return render(request, await author.author_list(store))


@router.get("/author/create")
async def author_create_get(request: Request):
    return render(request, author.author_create_get())


@router.post("/author/create")
async def author_create_post(request: Request, store: Store = Depends(get_store)):
    return render(request, await author.author_create_post(store, await read_form(request)))


@router.get("/author/{id}")
async def author_detail(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await author.author_detail(store, id))


@router.get("/author/{id}/delete")
async def author_delete_get(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await author.author_delete_get(store, id))


@router.post("/author/{id}/delete")
async def author_delete_post(id: str, request: Request, store: Store = Depends(get_store)):
    form = await read_form(request)
    return render(request, await author.author_delete_post(store, form.get("authorid") or id))


@router.get("/author/{id}/update")
async def author_update_get(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await author.author_update_get(store, id))


@router.post("/author/{id}/update")
async def author_update_post(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await author.author_update_post(store, id, await read_form(request)))


# ─────────────────────── GENRES ───────────────────────
@router.get("/genres")
async def genre_list(request: Request, store: Store = Depends(get_store)):
    return render(request, await genre.genre_list(store))


@router.get("/genre/create")
async def genre_create_get(request: Request):
    return render(request, genre.genre_create_get())


@router.post("/genre/create")
async def genre_create_post(request: Request, store: Store = Depends(get_store)):
    return render(request, await genre.genre_create_post(store, await read_form(request)))


@router.get("/genre/{id}")
async def genre_detail(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await genre.genre_detail(store, id))


@router.get("/genre/{id}/delete")
async def genre_delete_get(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await genre.genre_delete_get(store, id))


@router.post("/genre/{id}/delete")
async def genre_delete_post(id: str, request: Request, store: Store = Depends(get_store)):
    form = await read_form(request)
    return render(request, await genre.genre_delete_post(store, form.get("genreid") or id))


@router.get("/genre/{id}/update")
async def genre_update_get(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await genre.genre_update_get(store, id))


@router.post("/genre/{id}/update")
async def genre_update_post(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await genre.genre_update_post(store, id, await read_form(request)))


# ─────────────────────── BOOKS ───────────────────────
@router.get("/books")
async def book_list(request: Request, store: Store = Depends(get_store)):
    return render(request, await book.book_list(store))


@router.get("/book/create")
async def book_create_get(request: Request, store: Store = Depends(get_store)):
    return render(request, await book.book_create_get(store))


@router.post("/book/create")
async def book_create_post(request: Request, store: Store = Depends(get_store)):
    return render(request, await book.book_create_post(store, await read_form(request)))


@router.get("/book/{id}")
async def book_detail(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await book.book_detail(store, id))


@router.get("/book/{id}/delete")
async def book_delete_get(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await book.book_delete_get(store, id))


@router.post("/book/{id}/delete")
async def book_delete_post(id: str, request: Request, store: Store = Depends(get_store)):
    form = await read_form(request)
    return render(request, await book.book_delete_post(store, form.get("bookid") or id))


@router.get("/book/{id}/update")
async def book_update_get(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await book.book_update_get(store, id))


@router.post("/book/{id}/update")
async def book_update_post(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await book.book_update_post(store, id, await read_form(request)))


# ─────────────────────── BOOK INSTANCES ───────────────────────
@router.get("/bookinstances")
async def book_instance_list(request: Request, store: Store = Depends(get_store)):
    return render(request, await book_instance.book_instance_list(store))


@router.get("/bookinstance/create")
async def book_instance_create_get(request: Request, store: Store = Depends(get_store)):
    return render(request, await book_instance.book_instance_create_get(store))


@router.post("/bookinstance/create")
async def book_instance_create_post(request: Request, store: Store = Depends(get_store)):
    return render(request, await book_instance.book_instance_create_post(store, await read_form(request)))


@router.get("/bookinstance/{id}")
async def book_instance_detail(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await book_instance.book_instance_detail(store, id))


@router.get("/bookinstance/{id}/delete")
async def book_instance_delete_get(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await book_instance.book_instance_delete_get(store, id))


@router.post("/bookinstance/{id}/delete")
async def book_instance_delete_post(id: str, request: Request, store: Store = Depends(get_store)):
    form = await read_form(request)
    return render(request, await book_instance.book_instance_delete_post(store, form.get("bookinstanceid") or id))


@router.get("/bookinstance/{id}/update")
async def book_instance_update_get(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await book_instance.book_instance_update_get(store, id))


@router.post("/bookinstance/{id}/update")
async def book_instance_update_post(id: str, request: Request, store: Store = Depends(get_store)):
    return render(request, await book_instance.book_instance_update_post(store, id, await read_form(request)))
