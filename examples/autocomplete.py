# %% [markdown]
# # bitfuse: Autocomplete
#
# A text box suggesting words as the user types. The widget owns the text
# and the caret; bitfuse only reads them and hands back new values.

# %%
import bitfuse as bf

VOCABULARY = [
    "you", "I", "to", "the", "a", "and", "that", "it", "of", "me", "what",
    "is", "in", "this", "know", "for", "no", "have", "my", "just", "not",
    "do", "be", "on", "your", "was", "we", "with", "so", "but", "all", "well",
    "are", "he", "oh", "about", "right", "get", "here", "out", "going", "like",
    "yeah", "if", "can", "up", "want", "think", "that's", "now", "go", "him",
]

# Vocabulary is in frequency order; ties keep it, so common words come first.
suggester = bf.Suggester(bf.Fuse(VOCABULARY, threshold=0.5))

# %% [markdown]
# Simulate typing: after each keystroke, ask for the word before the caret.

# %%
text = ""
for char in "i thnk yu":
    text += char
    found = suggester.suggest(text, caret=len(text))
    print(f"{text!r:14} word={found.span.word!r:8} -> {found.candidates}")

# %% [markdown]
# Accepting a suggestion replaces the word and moves the caret past a space.

# %%
found = suggester.suggest(text, caret=len(text))
text, caret = bf.apply_suggestion(text, found.span, found.candidates[0])
print(repr(text), caret)

# %% [markdown]
# Record vocabularies suggest one field of each record.

# %%
records = [{"word": w, "rank": i} for i, w in enumerate(VOCABULARY)]
by_record = bf.Suggester(bf.Fuse(records, keys=["word"]), field="word", limit=5)
print(by_record.suggest("what abot", caret=9).candidates)
