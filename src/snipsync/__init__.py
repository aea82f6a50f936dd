"""snipsync: keep documentation code samples in sync with source repositories.

Source files mark a region to harvest:

    // @@@START SNIPSTART hello-world
    fmt.Println("hello")
    // @@@END

Documentation files mark where it goes:

    <!--START hello-world-->
    <!--END-->

Anything outside the insertion markers is preserved untouched.
"""

__version__ = "0.1.0"
