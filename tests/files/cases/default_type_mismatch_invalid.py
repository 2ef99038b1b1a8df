# @param {number} amount
def main(amount="ten"):
    return amount
