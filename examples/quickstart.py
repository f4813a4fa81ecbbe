# %% [markdown]
# # bitfuse: Quickstart
#
# **Typo-tolerant search** with the Bitap algorithm
#
# ---
#
# ## The Problem
#
# Users type fast and spell badly. A search box that only finds exact
# substrings answers "od mn war" with nothing, although the shelf holds
# "Old Man's War".
#
# bitfuse matches approximately: it counts the errors between the query and
# the text, prefers matches near the start of the text, and ranks whole
# collections of strings or records by the result.
#
# | Part | Topic |
# |------|-------|
# | 1 | Matching one pattern |
# | 2 | Searching a collection |
# | 3 | Records, keys and weights |
# | 4 | Tokenized queries |
# | 5 | Polars |

# %%
import polars as pl

import bitfuse as bf

# %% [markdown]
# ---
# ## Part 1: Matching one pattern
#
# `match` returns whether the pattern was found, a score (0.0 exact, 1.0 no
# match) and the character spans that matched.

# %%
result = bf.match("od mn war", "Old Man's War")
print(f"is_match={result.is_match} score={result.score:.3f}")
print(f"spans={result.matched_indices}")

# %% [markdown]
# The same pattern scores worse the further from `location` it is found.
# `distance` controls how quickly.

# %%
for text in ["man of war", "old man", "a very old man"]:
    print(f"{text!r:20} {bf.match('man', text).score:.3f}")

# %% [markdown]
# Reuse a `Bitap` matcher when one pattern meets many texts; its alphabet is
# computed once.

# %%
matcher = bf.Bitap("helo", threshold=0.4)
print([matcher.search(t).is_match for t in ["Hello", "help", "world"]])

# %% [markdown]
# ---
# ## Part 2: Searching a collection

# %%
words = ["you", "to", "the", "your", "yes", "young"]
print(bf.search(words, "yu"))

fuse = bf.Fuse(words, include_score=True)
for r in fuse.search("yu"):
    print(f"  {r.item:8} score={r.score:.3f}")

# %% [markdown]
# ---
# ## Part 3: Records, keys and weights
#
# Keys are dotted paths; lists along the way are expanded. A weight below 1
# makes a field compete for the best weighted score instead of taking part
# in the plain average.

# %%
books = [
    {"isbn": "0765348276", "title": "Old Man's War",
     "author": {"first_name": "John", "last_name": "Scalzi"}, "tags": ["sci-fi"]},
    {"isbn": "0312696957", "title": "The Lock Artist",
     "author": {"first_name": "Steve", "last_name": "Hamilton"}, "tags": ["thriller"]},
    {"isbn": "0321784421", "title": "HTML5",
     "author": {"first_name": "Remy", "last_name": "Sharp"}, "tags": ["web"]},
]

fuse = bf.Fuse(
    books,
    keys=[("title", 0.3), ("author.last_name", 0.7), "tags"],
    include_score=True,
    include_matches=True,
)
for r in fuse.search("hamiltn"):
    print(f"  {r.item['title']:18} score={r.score:.4f}")
    for m in r.matches:
        print(f"    {m.key}: {m.value!r} {m.indices}")

# %% [markdown]
# With `id`, results are identifiers instead of records.

# %%
print(bf.search(books, "scalzi", keys=["author.last_name"], id="isbn"))

# %% [markdown]
# ---
# ## Part 4: Tokenized queries
#
# `tokenize` also scores every word of the query against every word of the
# text. `match_all_tokens` drops records missing any query word.

# %%
titles = ["The Lock Artist", "Old Man's War", "The Old Man and the Sea"]
print(bf.search(titles, "old sea", tokenize=True))
print(bf.search(titles, "old sea", tokenize=True, match_all_tokens=True))

# %% [markdown]
# ---
# ## Part 5: Polars

# %%
df = pl.DataFrame({"title": [b["title"] for b in books], "year": [2005, 2010, 2010]})

print(df.with_columns(score=pl.col("title").bitap.score("old man")))
print(bf.search_dataframe(df, "lock artst"))
