"""Fixed Admin GraphQL queries relayed by the commerce gateway."""

PRODUCTS_PAGE_SIZE = 50
DEFAULT_ORDERS_LIMIT = 50

PRODUCTS_QUERY = """
query getProducts($first: Int!) {
  products(first: $first) {
    edges {
      node {
        id
        title
        handle
        description
        vendor
        productType
        createdAt
        updatedAt
        images(first: 1) {
          edges {
            node {
              url
              altText
            }
          }
        }
        variants(first: 10) {
          edges {
            node {
              id
              title
              price
              compareAtPrice
              inventoryQuantity
              sku
            }
          }
        }
      }
    }
  }
}
"""

ORDERS_QUERY = """
query getOrders($first: Int!) {
  orders(first: $first, sortKey: CREATED_AT, reverse: true) {
    edges {
      node {
        id
        name
        createdAt
        updatedAt
        totalPrice
        subtotalPrice
        totalTax
        currencyCode
        financialStatus
        fulfillmentStatus
        customer {
          id
          firstName
          lastName
          email
        }
        lineItems(first: 10) {
          edges {
            node {
              id
              title
              quantity
              originalUnitPrice
              discountedUnitPrice
              variant {
                id
                title
                sku
              }
            }
          }
        }
      }
    }
  }
}
"""
